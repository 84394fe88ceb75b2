"""Not-found errors for assignments and their collaborators."""

from __future__ import annotations

from uuid import UUID

from assignflow.domain.exceptions import AssignflowError


class NotFoundError(AssignflowError):
    """Base class for lookups that resolved to nothing."""


class AssignmentNotFoundError(NotFoundError):
    """Raised when an assignment id does not exist."""

    def __init__(self, assignment_id: UUID) -> None:
        self.assignment_id = assignment_id
        super().__init__(f"Assignment not found: {assignment_id}")


class MemberNotFoundError(NotFoundError):
    """Raised when a member id does not exist in the directory."""

    def __init__(self, member_id: UUID) -> None:
        self.member_id = member_id
        super().__init__(f"Member not found: {member_id}")


class WorkItemNotFoundError(NotFoundError):
    """Raised when a work item id does not exist in the catalog."""

    def __init__(self, work_item_id: UUID) -> None:
        self.work_item_id = work_item_id
        super().__init__(f"Work item not found: {work_item_id}")


class SubmissionNotFoundError(NotFoundError):
    """Raised when an assignment has no submission yet."""

    def __init__(self, assignment_id: UUID) -> None:
        self.assignment_id = assignment_id
        super().__init__(f"No submission recorded for assignment {assignment_id}")


class NoMatchingAssignmentsError(NotFoundError):
    """Raised when a listing filter matches no assignments.

    Attributes:
        filter_name: Name of the filter (``assignee_id`` or ``status``).
        filter_value: String form of the value filtered on.
    """

    def __init__(self, filter_name: str, filter_value: str) -> None:
        self.filter_name = filter_name
        self.filter_value = filter_value
        super().__init__(f"No assignments found for {filter_name}={filter_value}")
