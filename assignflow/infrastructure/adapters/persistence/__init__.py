"""PostgreSQL persistence adapters (SQLAlchemy async + asyncpg)."""

from assignflow.infrastructure.adapters.persistence.assignment_repository import (
    PostgresAssignmentRepository,
)
from assignflow.infrastructure.adapters.persistence.member_directory import (
    PostgresMemberDirectory,
)

__all__ = ["PostgresAssignmentRepository", "PostgresMemberDirectory"]
