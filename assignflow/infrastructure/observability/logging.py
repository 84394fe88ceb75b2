"""structlog setup shared by the API and the standalone sweeper.

Production and staging emit one JSON object per line for log shipping;
any other environment gets the coloured console renderer.

Example JSON entry:
    {"event": "sweep_completed", "level": "info",
     "timestamp": "2026-03-02T17:00:00.012345Z",
     "correlation_id": "7c1e...", "service": "AssignmentLifecycleService",
     "operation": "sweep_overdue", "transitioned": 3}
"""

import logging
import os
from typing import cast

import structlog
from structlog.typing import Processor

from assignflow.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
JSON_ENVIRONMENTS = frozenset({"production", "staging"})


def resolve_log_level(level: str | None = None) -> int:
    """Map a level name (or $LOG_LEVEL) to a logging constant; INFO if unknown."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def _processors(json_output: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        # ConsoleRenderer prints tracebacks itself
        chain.append(structlog.processors.format_exc_info)
        chain.append(structlog.processors.UnicodeDecoder())
        chain.append(structlog.processors.JSONRenderer())
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=True))
    return chain


def configure_structlog(environment: str = "production", level: str | None = None) -> None:
    """Configure structlog for the process. Call once at startup.

    Args:
        environment: ``production`` or ``staging`` for JSON lines,
            anything else for console output.
        level: Minimum level name; defaults to $LOG_LEVEL, then INFO.
    """
    structlog.configure(
        processors=_processors(environment in JSON_ENVIRONMENTS),
        wrapper_class=structlog.make_filtering_bound_logger(resolve_log_level(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
