"""
Integration test configuration with testcontainers.

Provides a session-scoped PostgreSQL 16 container and, per test, a
freshly migrated schema behind an async session factory.

Usage:
    @pytest.mark.integration
    async def test_example(session_factory: async_sessionmaker[AsyncSession]) -> None:
        repository = PostgresAssignmentRepository(session_factory)
        ...

Note: Docker must be running; tests are skipped otherwise.
"""

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from assignflow.bootstrap.database import to_asyncpg_url

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"


def _migration_statements() -> list[str]:
    statements: list[str] = []
    for path in sorted(MIGRATIONS_DIR.glob("*.sql")):
        for chunk in path.read_text().split(";"):
            if chunk.strip():
                statements.append(chunk)
    return statements


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Session-scoped PostgreSQL 16 container, started once per run."""
    try:
        container = PostgresContainer("postgres:16-alpine")
        container.start()
    except Exception as e:  # Docker not available
        pytest.skip(f"PostgreSQL container unavailable: {e}")
    try:
        yield container
    finally:
        container.stop()


@pytest.fixture(scope="session")
def postgres_async_url(postgres_container: PostgresContainer) -> str:
    """postgresql+asyncpg:// URL for the container."""
    return to_asyncpg_url(postgres_container.get_connection_url())


@pytest.fixture
async def session_factory(
    postgres_async_url: str,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory over a schema rebuilt from migrations for each test."""
    engine = create_async_engine(postgres_async_url, echo=False)
    async with engine.begin() as conn:
        await conn.execute(text("DROP SCHEMA IF EXISTS public CASCADE"))
        await conn.execute(text("CREATE SCHEMA public"))
        for statement in _migration_statements():
            await conn.execute(text(statement))

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()
