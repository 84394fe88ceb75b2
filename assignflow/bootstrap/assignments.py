"""Bootstrap wiring for assignment lifecycle dependencies.

Adapters are chosen once per process: PostgreSQL when DATABASE_URL is
set, in-memory stubs otherwise.
"""

from __future__ import annotations

import os

from structlog import get_logger

from assignflow.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from assignflow.application.ports.member_directory import MemberDirectoryProtocol
from assignflow.application.ports.time_authority import TimeAuthorityProtocol
from assignflow.application.services.assignment_lifecycle_service import (
    AssignmentLifecycleService,
)
from assignflow.application.services.assignment_query_service import (
    AssignmentQueryService,
)
from assignflow.application.services.deadline_sweeper import DeadlineSweeper
from assignflow.application.services.system_time_authority import SystemTimeAuthority
from assignflow.config.lifecycle_config import LifecycleConfig
from assignflow.infrastructure.stubs.assignment_repository_stub import (
    AssignmentRepositoryStub,
)
from assignflow.infrastructure.stubs.member_directory_stub import MemberDirectoryStub

logger = get_logger()

_assignment_repository: AssignmentRepositoryProtocol | None = None
_member_directory: MemberDirectoryProtocol | None = None
_time_authority: TimeAuthorityProtocol | None = None
_lifecycle_config: LifecycleConfig | None = None


def get_assignment_repository() -> AssignmentRepositoryProtocol:
    """Get the assignment repository.

    Returns the PostgreSQL repository if DATABASE_URL is configured,
    otherwise the in-memory stub.
    """
    global _assignment_repository
    if _assignment_repository is None:
        if os.environ.get("DATABASE_URL"):
            try:
                from assignflow.bootstrap.database import get_session_factory
                from assignflow.infrastructure.adapters.persistence.assignment_repository import (
                    PostgresAssignmentRepository,
                )

                _assignment_repository = PostgresAssignmentRepository(
                    session_factory=get_session_factory()
                )
                logger.info(
                    "assignment_repository_initialized",
                    repository_type="PostgreSQL",
                )
            except Exception as e:
                logger.error(
                    "postgres_repository_init_failed",
                    error=str(e),
                    message="Falling back to in-memory stub",
                )
                _assignment_repository = AssignmentRepositoryStub()
        else:
            logger.warning(
                "assignment_repository_initialized",
                repository_type="in-memory stub",
                message="DATABASE_URL not set; assignments are not persisted",
            )
            _assignment_repository = AssignmentRepositoryStub()
    return _assignment_repository


def get_member_directory() -> MemberDirectoryProtocol:
    """Get the member directory (PostgreSQL if configured, else stub)."""
    global _member_directory
    if _member_directory is None:
        if os.environ.get("DATABASE_URL"):
            try:
                from assignflow.bootstrap.database import get_session_factory
                from assignflow.infrastructure.adapters.persistence.member_directory import (
                    PostgresMemberDirectory,
                )

                _member_directory = PostgresMemberDirectory(
                    session_factory=get_session_factory()
                )
                logger.info("member_directory_initialized", directory_type="PostgreSQL")
            except Exception as e:
                logger.error(
                    "postgres_directory_init_failed",
                    error=str(e),
                    message="Falling back to in-memory stub",
                )
                _member_directory = MemberDirectoryStub()
        else:
            logger.warning(
                "member_directory_initialized",
                directory_type="in-memory stub",
            )
            _member_directory = MemberDirectoryStub()
    return _member_directory


def get_time_authority() -> TimeAuthorityProtocol:
    global _time_authority
    if _time_authority is None:
        _time_authority = SystemTimeAuthority()
    return _time_authority


def get_lifecycle_config() -> LifecycleConfig:
    """Get the lifecycle config, read from the environment once."""
    global _lifecycle_config
    if _lifecycle_config is None:
        _lifecycle_config = LifecycleConfig.from_environment()
        logger.info(
            "lifecycle_config_loaded",
            cutoff=_lifecycle_config.cutoff_time.isoformat(),
            timezone=_lifecycle_config.timezone_name,
            sweep_interval_seconds=_lifecycle_config.sweep_interval_seconds,
        )
    return _lifecycle_config


def build_lifecycle_service() -> AssignmentLifecycleService:
    return AssignmentLifecycleService(
        repository=get_assignment_repository(),
        directory=get_member_directory(),
        time_authority=get_time_authority(),
        config=get_lifecycle_config(),
    )


def build_query_service() -> AssignmentQueryService:
    return AssignmentQueryService(
        repository=get_assignment_repository(),
        directory=get_member_directory(),
    )


def build_deadline_sweeper(
    lifecycle_service: AssignmentLifecycleService | None = None,
) -> DeadlineSweeper:
    """Build a sweeper driving ``lifecycle_service`` (or a fresh one)."""
    service = lifecycle_service or build_lifecycle_service()
    return DeadlineSweeper(
        lifecycle_service=service,
        time_authority=get_time_authority(),
        interval_seconds=service.config.sweep_interval_seconds,
    )


def set_assignment_repository(repository: AssignmentRepositoryProtocol) -> None:
    global _assignment_repository
    _assignment_repository = repository


def set_member_directory(directory: MemberDirectoryProtocol) -> None:
    global _member_directory
    _member_directory = directory


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    global _time_authority
    _time_authority = time_authority


def reset_assignment_dependencies() -> None:
    """Reset singletons (for testing)."""
    global _assignment_repository, _member_directory, _time_authority
    global _lifecycle_config
    _assignment_repository = None
    _member_directory = None
    _time_authority = None
    _lifecycle_config = None
