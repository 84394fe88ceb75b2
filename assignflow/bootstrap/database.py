"""PostgreSQL engine and session factory for the persistence adapters.

Reads ``DATABASE_URL`` (any ``postgres://`` / ``postgresql://`` form is
accepted and rewritten for asyncpg) and ``SQLALCHEMY_ECHO``. The engine
is created lazily on first use and shared for the life of the process.

    sessions = get_session_factory()
    async with sessions() as session:
        ...
"""

from __future__ import annotations

import os

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from structlog import get_logger

ASYNCPG_SCHEME = "postgresql+asyncpg://"
_FOREIGN_SCHEMES = ("postgresql+psycopg2://", "postgresql://", "postgres://")
_TRUTHY = frozenset({"1", "true", "yes"})

_engine: AsyncEngine | None = None
_sessions: async_sessionmaker[AsyncSession] | None = None


def to_asyncpg_url(url: str) -> str:
    """Return ``url`` with its scheme switched to ``postgresql+asyncpg``."""
    if url.startswith(ASYNCPG_SCHEME):
        return url
    for scheme in _FOREIGN_SCHEMES:
        if url.startswith(scheme):
            return ASYNCPG_SCHEME + url[len(scheme):]
    return ASYNCPG_SCHEME + url


def get_database_url() -> str:
    """Read ``DATABASE_URL`` and normalise it for asyncpg.

    Raises:
        ValueError: If the variable is unset or empty.
    """
    raw = os.environ.get("DATABASE_URL", "").strip()
    if not raw:
        raise ValueError("DATABASE_URL is not set; the postgres adapters need it")
    return to_asyncpg_url(raw)


def mask_database_url(url: str) -> str:
    """Replace the password in ``user:password@host`` with ``***``."""
    if "@" not in url:
        return url
    credentials, location = url.rsplit("@", 1)
    scheme, sep, userinfo = credentials.partition("://")
    user, has_password, _password = userinfo.partition(":")
    if not sep or not has_password:
        return url
    return f"{scheme}://{user}:***@{location}"


def _echo_sql() -> bool:
    return os.environ.get("SQLALCHEMY_ECHO", "").strip().lower() in _TRUTHY


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating the engine on first call.

    Raises:
        ValueError: If DATABASE_URL is not configured.
    """
    global _engine, _sessions

    if _sessions is not None:
        return _sessions

    url = get_database_url()
    log = get_logger().bind(component="database_bootstrap")
    _engine = create_async_engine(url, echo=_echo_sql(), pool_pre_ping=True)
    _sessions = async_sessionmaker(_engine, class_=AsyncSession, expire_on_commit=False)
    log.info("database_engine_created", url=mask_database_url(url))
    return _sessions


def reset_database_bootstrap() -> None:
    """Forget the engine without disposing it. Tests only."""
    global _engine, _sessions
    _engine = None
    _sessions = None


async def close_database_engine() -> None:
    """Dispose the pooled connections, if an engine was ever created."""
    global _engine, _sessions
    engine, _engine, _sessions = _engine, None, None
    if engine is not None:
        await engine.dispose()
