"""Conflict errors for the one-assignment-per-pair rule."""

from __future__ import annotations

from uuid import UUID

from assignflow.domain.exceptions import AssignflowError


class ConflictError(AssignflowError):
    """Base class for writes that collide with existing records."""


class DuplicateAssignmentError(ConflictError):
    """Raised when an (assignee, work item) pair already has an assignment.

    The rule holds regardless of the existing assignment's status.

    Attributes:
        assignee_id: Member the work was to be assigned to.
        work_item_id: Catalog item being assigned.
        existing_assignment_id: Id of the existing assignment, when known.
    """

    def __init__(
        self,
        assignee_id: UUID,
        work_item_id: UUID,
        existing_assignment_id: UUID | None = None,
    ) -> None:
        self.assignee_id = assignee_id
        self.work_item_id = work_item_id
        self.existing_assignment_id = existing_assignment_id
        super().__init__(
            f"Work item {work_item_id} is already assigned to member {assignee_id}"
        )
