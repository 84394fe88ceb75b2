"""Input validation errors."""

from __future__ import annotations

from assignflow.domain.exceptions import AssignflowError


class ValidationError(AssignflowError):
    """Raised when an operation's input is malformed or unacceptable.

    Attributes:
        field: Name of the offending input.
        reason: Why the value was rejected.
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")
