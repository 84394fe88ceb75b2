"""State transition errors for the assignment lifecycle.

Raised whenever an operation is attempted from a status that the
transition matrix does not permit, including the loser of a race
between two writers that started from the same status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from assignflow.domain.exceptions import AssignflowError

if TYPE_CHECKING:
    from assignflow.domain.models.assignment import (
        AssignmentStatus,
        LifecycleOperation,
    )


class TransitionNotAllowedError(AssignflowError):
    """Raised when an operation is not allowed from the current status.

    Attributes:
        current_status: Status the assignment is in.
        operation: Operation that was attempted.
        assignment_id: Assignment concerned, when known.
    """

    def __init__(
        self,
        current_status: AssignmentStatus,
        operation: LifecycleOperation,
        assignment_id: UUID | None = None,
    ) -> None:
        """Initialize transition error.

        Args:
            current_status: Status the assignment is currently in.
            operation: The attempted lifecycle operation.
            assignment_id: Assignment concerned (optional).
        """
        self.current_status = current_status
        self.operation = operation
        self.assignment_id = assignment_id
        subject = f"assignment {assignment_id}" if assignment_id else "assignment"
        super().__init__(
            f"Cannot {operation.value.lower()} {subject} "
            f"in status {current_status.value}"
        )
