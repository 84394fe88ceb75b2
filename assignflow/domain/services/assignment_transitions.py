"""Pure lifecycle rules for assignments.

Nothing here touches a store or a clock: callers pass "now" in. The
lifecycle service applies the results through conditional writes.
"""

from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from uuid import UUID

from assignflow.domain.errors.state_transition import TransitionNotAllowedError
from assignflow.domain.models.assignment import (
    TRANSITION_MATRIX,
    AssignmentStatus,
    LifecycleEvent,
    LifecycleOperation,
)


class SubmissionWriteMode(Enum):
    """How a submit persists its Submission record."""

    CREATE = "CREATE"
    REPLACE = "REPLACE"


def is_past_cutoff(now_local: datetime, cutoff: time) -> bool:
    """Check whether the local wall-clock time has reached the daily cutoff.

    Exactly at the cutoff counts as past it.
    """
    return now_local.time().replace(tzinfo=None) >= cutoff


def initial_status(deadline: date, now_local: datetime, cutoff: time) -> AssignmentStatus:
    """Compute the status of a newly created assignment.

    Args:
        deadline: Calendar day the work is due.
        now_local: Creation time in the configured timezone.
        cutoff: Daily cutoff time.

    Returns:
        IN_PROGRESS when the deadline is in the future, or is today and
        the cutoff has not been reached. INCOMPLETE otherwise.
    """
    today = now_local.date()
    if deadline > today:
        return AssignmentStatus.IN_PROGRESS
    if deadline == today and not is_past_cutoff(now_local, cutoff):
        return AssignmentStatus.IN_PROGRESS
    return AssignmentStatus.INCOMPLETE


def next_status(
    current: AssignmentStatus,
    event: LifecycleEvent,
    operation: LifecycleOperation,
    assignment_id: UUID | None = None,
) -> AssignmentStatus:
    """Resolve the status ``event`` leads to from ``current``.

    Raises:
        TransitionNotAllowedError: If the matrix has no entry for the pair.
    """
    target = TRANSITION_MATRIX.get(current, {}).get(event)
    if target is None:
        raise TransitionNotAllowedError(
            current_status=current,
            operation=operation,
            assignment_id=assignment_id,
        )
    return target


def submission_write_mode(current: AssignmentStatus) -> SubmissionWriteMode:
    """Whether a submit from ``current`` creates or replaces the Submission.

    Only a resubmission after rejection replaces; a REJECTED assignment
    with no stored submission still falls back to creating one.
    """
    if current is AssignmentStatus.REJECTED:
        return SubmissionWriteMode.REPLACE
    return SubmissionWriteMode.CREATE
