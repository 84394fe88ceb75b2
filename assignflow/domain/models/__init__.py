"""Domain models for assignflow."""

from assignflow.domain.models.assignment import (
    REVIEWABLE_STATUSES,
    SUBMITTABLE_STATUSES,
    TRANSITION_MATRIX,
    Assignment,
    AssignmentStatus,
    LifecycleEvent,
    LifecycleOperation,
    ReviewDecision,
    Submission,
)
from assignflow.domain.models.member import Member, Role, WorkItem

__all__ = [
    "REVIEWABLE_STATUSES",
    "SUBMITTABLE_STATUSES",
    "TRANSITION_MATRIX",
    "Assignment",
    "AssignmentStatus",
    "LifecycleEvent",
    "LifecycleOperation",
    "Member",
    "ReviewDecision",
    "Role",
    "Submission",
    "WorkItem",
]
