"""Domain errors for assignflow.

Every error derives from AssignflowError. The HTTP layer maps each
family to a problem-details status code.
"""

from assignflow.domain.errors.authorization import AuthorizationError
from assignflow.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from assignflow.domain.errors.conflict import ConflictError, DuplicateAssignmentError
from assignflow.domain.errors.internal import InternalFailureError
from assignflow.domain.errors.not_found import (
    AssignmentNotFoundError,
    MemberNotFoundError,
    NoMatchingAssignmentsError,
    NotFoundError,
    SubmissionNotFoundError,
    WorkItemNotFoundError,
)
from assignflow.domain.errors.state_transition import TransitionNotAllowedError
from assignflow.domain.errors.validation import ValidationError

__all__ = [
    "AssignmentNotFoundError",
    "AuthorizationError",
    "ConcurrentModificationError",
    "ConflictError",
    "DuplicateAssignmentError",
    "InternalFailureError",
    "MemberNotFoundError",
    "NoMatchingAssignmentsError",
    "NotFoundError",
    "SubmissionNotFoundError",
    "TransitionNotAllowedError",
    "ValidationError",
    "WorkItemNotFoundError",
]
