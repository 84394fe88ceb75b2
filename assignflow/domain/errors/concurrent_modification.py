"""Concurrent modification error for compare-and-swap status writes.

Store adapters raise this when the status observed inside the atomic
write no longer matches the status the caller read. The lifecycle
service re-reads the assignment and surfaces a TransitionNotAllowedError
carrying the winning writer's status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from assignflow.domain.exceptions import AssignflowError

if TYPE_CHECKING:
    from assignflow.domain.models.assignment import AssignmentStatus


class ConcurrentModificationError(AssignflowError):
    """Raised when a CAS write fails because the status changed underneath it.

    Attributes:
        assignment_id: Assignment that was being modified.
        expected_status: Status the write required.
        actual_status: Status found inside the atomic unit.
        operation: Name of the write (e.g. "record_submission").
    """

    def __init__(
        self,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        actual_status: AssignmentStatus,
        operation: str,
    ) -> None:
        self.assignment_id = assignment_id
        self.expected_status = expected_status
        self.actual_status = actual_status
        self.operation = operation
        super().__init__(
            f"Concurrent modification detected for assignment {assignment_id} "
            f"during {operation}. Expected status {expected_status.value}, "
            f"found {actual_status.value}."
        )
