"""Opaque wrapper for unexpected failures."""

from __future__ import annotations

from assignflow.domain.exceptions import AssignflowError


class InternalFailureError(AssignflowError):
    """Raised when an operation fails for a reason outside the domain.

    Store outages and driver errors surface as this type. The underlying
    exception is chained as ``__cause__`` and logged where it is wrapped;
    callers get no detail beyond the operation name.

    Attributes:
        operation: Operation that failed.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Internal failure during {operation}")
