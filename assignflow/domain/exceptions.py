"""Base exception classes for the assignflow domain layer."""


class AssignflowError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so that
    callers (HTTP routes, workers) can handle the whole taxonomy uniformly.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
