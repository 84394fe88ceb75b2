"""Read-only queries over stored assignments.

Listings that match nothing raise NoMatchingAssignmentsError rather
than returning an empty list, except ``list_all`` which is an
unfiltered view.
"""

from __future__ import annotations

from uuid import UUID

from assignflow.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from assignflow.application.ports.member_directory import MemberDirectoryProtocol
from assignflow.application.services.base import LoggingMixin, internal_failure_guard
from assignflow.domain.errors import (
    AssignmentNotFoundError,
    NoMatchingAssignmentsError,
    SubmissionNotFoundError,
    ValidationError,
)
from assignflow.domain.models.assignment import Assignment, AssignmentStatus, Submission
from assignflow.domain.models.member import Member, WorkItem


def parse_status(status: AssignmentStatus | str) -> AssignmentStatus:
    """Resolve a status filter, rejecting unknown names.

    Raises:
        ValidationError: If ``status`` names no lifecycle status.
    """
    if isinstance(status, AssignmentStatus):
        return status
    try:
        return AssignmentStatus(status)
    except ValueError:
        raise ValidationError(
            "status",
            f"must be one of {[s.value for s in AssignmentStatus]}, got {status!r}",
        ) from None


class AssignmentQueryService(LoggingMixin):
    """Query facade for assignments, submissions and the directory."""

    def __init__(
        self,
        repository: AssignmentRepositoryProtocol,
        directory: MemberDirectoryProtocol,
    ) -> None:
        self._repository = repository
        self._directory = directory
        self._init_logger(component="query")

    async def get_assignment(self, assignment_id: UUID) -> Assignment:
        """Fetch one assignment.

        Raises:
            AssignmentNotFoundError: If the id does not exist.
        """
        log = self._log_operation("get_assignment", assignment_id=str(assignment_id))
        with internal_failure_guard("get_assignment", log):
            assignment = await self._repository.get(assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(assignment_id)
        return assignment

    async def get_submission(self, assignment_id: UUID) -> Submission:
        """Fetch the live submission of an assignment.

        Raises:
            AssignmentNotFoundError: If the assignment does not exist.
            SubmissionNotFoundError: If nothing has been submitted yet.
        """
        log = self._log_operation("get_submission", assignment_id=str(assignment_id))
        with internal_failure_guard("get_submission", log):
            if await self._repository.get(assignment_id) is None:
                raise AssignmentNotFoundError(assignment_id)
            submission = await self._repository.get_submission(assignment_id)
        if submission is None:
            raise SubmissionNotFoundError(assignment_id)
        return submission

    async def list_all(self) -> list[Assignment]:
        log = self._log_operation("list_all")
        with internal_failure_guard("list_all", log):
            return await self._repository.list_all()

    async def list_by_assignee(self, assignee_id: UUID) -> list[Assignment]:
        """List an assignee's assignments, newest first.

        Raises:
            NoMatchingAssignmentsError: If the assignee has none.
        """
        log = self._log_operation("list_by_assignee", assignee_id=str(assignee_id))
        with internal_failure_guard("list_by_assignee", log):
            assignments = await self._repository.list_by_assignee(assignee_id)
        if not assignments:
            raise NoMatchingAssignmentsError("assignee_id", str(assignee_id))
        return assignments

    async def list_by_status(self, status: AssignmentStatus | str) -> list[Assignment]:
        """List assignments in one status, newest first.

        Raises:
            ValidationError: If ``status`` is not a lifecycle status.
            NoMatchingAssignmentsError: If none are in that status.
        """
        parsed = parse_status(status)
        log = self._log_operation("list_by_status", status=parsed.value)
        with internal_failure_guard("list_by_status", log):
            assignments = await self._repository.list_by_status(parsed)
        if not assignments:
            raise NoMatchingAssignmentsError("status", parsed.value)
        return assignments

    async def list_assignable_members(self) -> list[Member]:
        log = self._log_operation("list_assignable_members")
        with internal_failure_guard("list_assignable_members", log):
            return await self._directory.list_assignable_members()

    async def list_work_items(self) -> list[WorkItem]:
        log = self._log_operation("list_work_items")
        with internal_failure_guard("list_work_items", log):
            return await self._directory.list_work_items()
