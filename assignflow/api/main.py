"""FastAPI application entry point for assignflow.

Environment Variables:
- ENVIRONMENT: 'production' for JSON logs (default: development)
- ASSIGNMENT_SWEEPER_ENABLED: Run the deadline sweeper in-process (default: true)
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from structlog import get_logger

from assignflow import __version__
from assignflow.api.dependencies.assignments import get_deadline_sweeper
from assignflow.api.middleware.logging_middleware import LoggingMiddleware
from assignflow.api.routes.assignments import router as assignments_router
from assignflow.api.routes.health import router as health_router
from assignflow.bootstrap.database import close_database_engine
from assignflow.bootstrap.logging import configure_structlog

logger = get_logger()


def sweeper_enabled() -> bool:
    return os.environ.get("ASSIGNMENT_SWEEPER_ENABLED", "true").lower() in (
        "1",
        "true",
        "yes",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    load_dotenv()
    configure_structlog()
    sweeper = get_deadline_sweeper() if sweeper_enabled() else None
    app.state.deadline_sweeper = sweeper
    if sweeper is not None:
        await sweeper.start()
    else:
        logger.info("deadline_sweeper_disabled")
    try:
        yield
    finally:
        if sweeper is not None:
            await sweeper.stop()
        await close_database_engine()


app = FastAPI(
    title="assignflow",
    description="Deadline-bound task assignment lifecycle",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)
app.include_router(health_router)
app.include_router(assignments_router)
