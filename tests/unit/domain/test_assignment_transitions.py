"""Unit tests for the pure lifecycle rules."""

from datetime import date, datetime, time, timezone

import pytest

from assignflow.domain.errors import TransitionNotAllowedError
from assignflow.domain.models.assignment import (
    AssignmentStatus,
    LifecycleEvent,
    LifecycleOperation,
)
from assignflow.domain.services.assignment_transitions import (
    SubmissionWriteMode,
    initial_status,
    is_past_cutoff,
    next_status,
    submission_write_mode,
)

CUTOFF = time(17, 0)
TODAY = date(2026, 3, 2)


def _at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute, second, tzinfo=timezone.utc)


class TestIsPastCutoff:
    def test_before_cutoff(self) -> None:
        assert not is_past_cutoff(_at(16, 59, 59), CUTOFF)

    def test_exactly_at_cutoff_counts_as_past(self) -> None:
        assert is_past_cutoff(_at(17), CUTOFF)

    def test_after_cutoff(self) -> None:
        assert is_past_cutoff(_at(23, 30), CUTOFF)


class TestInitialStatus:
    def test_future_deadline_is_in_progress(self) -> None:
        assert initial_status(date(2026, 3, 3), _at(23), CUTOFF) == AssignmentStatus.IN_PROGRESS

    def test_today_before_cutoff_is_in_progress(self) -> None:
        assert initial_status(TODAY, _at(10), CUTOFF) == AssignmentStatus.IN_PROGRESS

    def test_today_at_cutoff_is_incomplete(self) -> None:
        assert initial_status(TODAY, _at(17), CUTOFF) == AssignmentStatus.INCOMPLETE

    def test_today_after_cutoff_is_incomplete(self) -> None:
        assert initial_status(TODAY, _at(18), CUTOFF) == AssignmentStatus.INCOMPLETE

    def test_past_deadline_is_incomplete(self) -> None:
        assert initial_status(date(2026, 3, 1), _at(9), CUTOFF) == AssignmentStatus.INCOMPLETE


class TestNextStatus:
    def test_allowed_transition(self) -> None:
        assert (
            next_status(
                AssignmentStatus.INCOMPLETE,
                LifecycleEvent.SUBMIT,
                LifecycleOperation.SUBMIT,
            )
            == AssignmentStatus.LATESUBMIT
        )

    @pytest.mark.parametrize(
        "current",
        [
            AssignmentStatus.COMPLETED,
            AssignmentStatus.LATESUBMIT,
            AssignmentStatus.RESUBMITTED,
            AssignmentStatus.APPROVED,
            AssignmentStatus.PENDING,
        ],
    )
    def test_submit_rejected_outside_submittable_statuses(
        self, current: AssignmentStatus
    ) -> None:
        with pytest.raises(TransitionNotAllowedError) as exc_info:
            next_status(current, LifecycleEvent.SUBMIT, LifecycleOperation.SUBMIT)

        assert exc_info.value.current_status == current
        assert exc_info.value.operation == LifecycleOperation.SUBMIT

    def test_review_on_in_progress_rejected(self) -> None:
        with pytest.raises(TransitionNotAllowedError):
            next_status(
                AssignmentStatus.IN_PROGRESS,
                LifecycleEvent.APPROVE,
                LifecycleOperation.REVIEW,
            )

    def test_deadline_only_moves_in_progress(self) -> None:
        with pytest.raises(TransitionNotAllowedError):
            next_status(
                AssignmentStatus.COMPLETED,
                LifecycleEvent.DEADLINE_PASSED,
                LifecycleOperation.SWEEP,
            )


class TestSubmissionWriteMode:
    def test_rejected_replaces(self) -> None:
        assert submission_write_mode(AssignmentStatus.REJECTED) is SubmissionWriteMode.REPLACE

    @pytest.mark.parametrize(
        "current", [AssignmentStatus.IN_PROGRESS, AssignmentStatus.INCOMPLETE]
    )
    def test_first_submission_creates(self, current: AssignmentStatus) -> None:
        assert submission_write_mode(current) is SubmissionWriteMode.CREATE
