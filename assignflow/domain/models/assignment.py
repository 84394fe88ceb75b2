"""Assignment domain model and lifecycle state machine.

An assignment binds one assignee to one catalog work item with a
calendar-day deadline. Its status is driven by three independent
actors: the deadline sweeper, the assignee submitting work and a
supervisor reviewing it. All of them go through TRANSITION_MATRIX.

State Machine:
    IN_PROGRESS -SUBMIT-> COMPLETED
    IN_PROGRESS -DEADLINE_PASSED-> INCOMPLETE
    INCOMPLETE  -SUBMIT-> LATESUBMIT
    REJECTED    -SUBMIT-> RESUBMITTED
    COMPLETED | LATESUBMIT | RESUBMITTED -APPROVE-> APPROVED
    COMPLETED | LATESUBMIT | RESUBMITTED -REJECT-> REJECTED

    APPROVED is terminal. PENDING is declared for storage compatibility
    and is never produced by any lifecycle operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from uuid import UUID


class AssignmentStatus(Enum):
    """Status in the assignment lifecycle."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    INCOMPLETE = "INCOMPLETE"
    COMPLETED = "COMPLETED"
    LATESUBMIT = "LATESUBMIT"
    REJECTED = "REJECTED"
    RESUBMITTED = "RESUBMITTED"
    APPROVED = "APPROVED"

    def is_terminal(self) -> bool:
        """Check if no lifecycle event can leave this status.

        Returns:
            True for APPROVED (and the unreachable PENDING).
        """
        return not TRANSITION_MATRIX.get(self)

    def allowed_events(self) -> frozenset[LifecycleEvent]:
        """Get the events that may fire from this status."""
        return frozenset(TRANSITION_MATRIX.get(self, {}))


class LifecycleEvent(Enum):
    """Events that drive the state machine."""

    SUBMIT = "SUBMIT"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    DEADLINE_PASSED = "DEADLINE_PASSED"


class LifecycleOperation(Enum):
    """Caller-facing operations, reported in transition errors."""

    CREATE = "CREATE"
    SUBMIT = "SUBMIT"
    REVIEW = "REVIEW"
    SWEEP = "SWEEP"


class ReviewDecision(Enum):
    """Outcome a supervisor may give a submission."""

    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def event(self) -> LifecycleEvent:
        if self is ReviewDecision.APPROVED:
            return LifecycleEvent.APPROVE
        return LifecycleEvent.REJECT


_REVIEWABLE = {
    LifecycleEvent.APPROVE: AssignmentStatus.APPROVED,
    LifecycleEvent.REJECT: AssignmentStatus.REJECTED,
}

# Single source of truth for lifecycle transitions.
# Statuses absent from the matrix (or mapped to {}) accept no events.
TRANSITION_MATRIX: dict[AssignmentStatus, dict[LifecycleEvent, AssignmentStatus]] = {
    AssignmentStatus.IN_PROGRESS: {
        LifecycleEvent.SUBMIT: AssignmentStatus.COMPLETED,
        LifecycleEvent.DEADLINE_PASSED: AssignmentStatus.INCOMPLETE,
    },
    AssignmentStatus.INCOMPLETE: {
        LifecycleEvent.SUBMIT: AssignmentStatus.LATESUBMIT,
    },
    AssignmentStatus.REJECTED: {
        LifecycleEvent.SUBMIT: AssignmentStatus.RESUBMITTED,
    },
    AssignmentStatus.COMPLETED: dict(_REVIEWABLE),
    AssignmentStatus.LATESUBMIT: dict(_REVIEWABLE),
    AssignmentStatus.RESUBMITTED: dict(_REVIEWABLE),
    AssignmentStatus.APPROVED: {},
    AssignmentStatus.PENDING: {},
}

SUBMITTABLE_STATUSES: frozenset[AssignmentStatus] = frozenset(
    status
    for status, events in TRANSITION_MATRIX.items()
    if LifecycleEvent.SUBMIT in events
)

REVIEWABLE_STATUSES: frozenset[AssignmentStatus] = frozenset(
    status
    for status, events in TRANSITION_MATRIX.items()
    if LifecycleEvent.APPROVE in events
)


@dataclass(frozen=True, eq=True)
class Assignment:
    """A deadline-bound task assigned to one member.

    Attributes:
        id: Assignment identifier.
        assignee_id: Member the work is assigned to.
        work_item_id: Catalog item being worked on.
        deadline: Calendar date the work is due.
        status: Current lifecycle status.
        description: Free-text instructions.
        assigned_by: Display name of the assigning supervisor.
        created_at: Creation timestamp from the time authority.
        updated_at: Last status change timestamp.
        remarks_by_admin: Supervisor remarks from the latest review.
    """

    id: UUID
    assignee_id: UUID
    work_item_id: UUID
    deadline: date
    status: AssignmentStatus
    description: str
    assigned_by: str
    created_at: datetime
    updated_at: datetime
    remarks_by_admin: str | None = field(default=None)

    def with_status(
        self,
        new_status: AssignmentStatus,
        updated_at: datetime,
        remarks_by_admin: str | None = None,
    ) -> Assignment:
        """Return a copy carrying ``new_status``.

        No transition validation happens here; callers go through
        ``assignment_transitions.next_status`` first.
        """
        return replace(
            self,
            status=new_status,
            updated_at=updated_at,
            remarks_by_admin=(
                remarks_by_admin if remarks_by_admin is not None else self.remarks_by_admin
            ),
        )


@dataclass(frozen=True, eq=True)
class Submission:
    """Work submitted against an assignment.

    At most one live submission exists per assignment. A resubmission
    after rejection replaces the content but keeps the same ``id``.

    Attributes:
        id: Submission identifier.
        assignment_id: Owning assignment.
        submitted_at: When the work was (last) submitted.
        remarks: Assignee's remarks.
        artifact_ref: Opaque reference to the externally stored file.
    """

    id: UUID
    assignment_id: UUID
    submitted_at: datetime
    remarks: str
    artifact_ref: str
