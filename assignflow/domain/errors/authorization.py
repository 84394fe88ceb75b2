"""Authorization errors for role and ownership checks."""

from __future__ import annotations

from uuid import UUID

from assignflow.domain.exceptions import AssignflowError


class AuthorizationError(AssignflowError):
    """Raised when the caller lacks the role or ownership an operation needs.

    Attributes:
        actor_id: Member attempting the operation.
        operation: Operation that was refused.
        reason: Short explanation of the missing capability.
    """

    def __init__(self, actor_id: UUID, operation: str, reason: str) -> None:
        self.actor_id = actor_id
        self.operation = operation
        self.reason = reason
        super().__init__(f"Member {actor_id} may not {operation}: {reason}")
