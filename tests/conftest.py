"""
Pytest configuration and shared fixtures for assignflow tests.

Testing Standards:
- Async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/ and need Docker
"""

import time
from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from assignflow.application.services.assignment_lifecycle_service import (
    AssignmentLifecycleService,
)
from assignflow.application.services.assignment_query_service import (
    AssignmentQueryService,
)
from assignflow.config.lifecycle_config import LifecycleConfig
from assignflow.domain.models.member import Member, Role, WorkItem
from assignflow.infrastructure.stubs.assignment_repository_stub import (
    AssignmentRepositoryStub,
)
from assignflow.infrastructure.stubs.member_directory_stub import MemberDirectoryStub
from tests.helpers.fake_time_authority import FakeTimeAuthority

# 10:00 UTC on a Monday, well before the 17:00 cutoff
MORNING = datetime(2026, 3, 2, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def project_version() -> str:
    from assignflow import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    return FakeTimeAuthority(frozen_at=MORNING)


@pytest.fixture
def supervisor() -> Member:
    return Member(
        id=uuid4(),
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
        role=Role.SUPERVISOR,
    )


@pytest.fixture
def assignee() -> Member:
    return Member(
        id=uuid4(),
        email="grace@example.com",
        first_name="Grace",
        last_name="Hopper",
        role=Role.ASSIGNEE,
    )


@pytest.fixture
def other_assignee() -> Member:
    return Member(
        id=uuid4(),
        email="alan@example.com",
        first_name="Alan",
        last_name="Turing",
        role=Role.ASSIGNEE,
    )


@pytest.fixture
def work_item() -> WorkItem:
    return WorkItem(id=uuid4(), name="Quarterly report")


@pytest.fixture
def repository() -> AssignmentRepositoryStub:
    return AssignmentRepositoryStub()


@pytest.fixture
def directory(
    supervisor: Member,
    assignee: Member,
    other_assignee: Member,
    work_item: WorkItem,
) -> MemberDirectoryStub:
    return MemberDirectoryStub(
        members=[supervisor, assignee, other_assignee],
        work_items=[work_item],
    )


@pytest.fixture
def lifecycle_config() -> LifecycleConfig:
    # Cutoffs in these tests are written in UTC, whatever zone the host runs in
    return LifecycleConfig(timezone_name="UTC")


@pytest.fixture
def host_timezone(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[str], None]]:
    """Switch the process-local zone via ``TZ``; restored on teardown.

    Takes POSIX TZ strings such as ``"BTT-6"`` (UTC+6), which need no
    zone database on the host.
    """
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset() is unavailable on this platform")

    def _switch(tz: str) -> None:
        monkeypatch.setenv("TZ", tz)
        time.tzset()

    yield _switch
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def lifecycle_service(
    repository: AssignmentRepositoryStub,
    directory: MemberDirectoryStub,
    fake_time_authority: FakeTimeAuthority,
    lifecycle_config: LifecycleConfig,
) -> AssignmentLifecycleService:
    return AssignmentLifecycleService(
        repository=repository,
        directory=directory,
        time_authority=fake_time_authority,
        config=lifecycle_config,
    )


@pytest.fixture
def query_service(
    repository: AssignmentRepositoryStub,
    directory: MemberDirectoryStub,
) -> AssignmentQueryService:
    return AssignmentQueryService(repository=repository, directory=directory)
