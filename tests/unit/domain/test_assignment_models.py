"""Unit tests for the assignment model and transition matrix."""

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from assignflow.domain.models.assignment import (
    REVIEWABLE_STATUSES,
    SUBMITTABLE_STATUSES,
    TRANSITION_MATRIX,
    Assignment,
    AssignmentStatus,
    LifecycleEvent,
    ReviewDecision,
)
from assignflow.domain.models.member import Member, Role

NOW = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)


def _assignment(status: AssignmentStatus = AssignmentStatus.IN_PROGRESS) -> Assignment:
    return Assignment(
        id=uuid4(),
        assignee_id=uuid4(),
        work_item_id=uuid4(),
        deadline=date(2026, 3, 2),
        status=status,
        description="Write the report",
        assigned_by="Ada Lovelace",
        created_at=NOW,
        updated_at=NOW,
    )


class TestTransitionMatrix:
    """Tests for TRANSITION_MATRIX."""

    def test_every_status_has_an_entry(self) -> None:
        assert set(TRANSITION_MATRIX) == set(AssignmentStatus)

    @pytest.mark.parametrize(
        ("current", "event", "expected"),
        [
            (AssignmentStatus.IN_PROGRESS, LifecycleEvent.SUBMIT, AssignmentStatus.COMPLETED),
            (
                AssignmentStatus.IN_PROGRESS,
                LifecycleEvent.DEADLINE_PASSED,
                AssignmentStatus.INCOMPLETE,
            ),
            (AssignmentStatus.INCOMPLETE, LifecycleEvent.SUBMIT, AssignmentStatus.LATESUBMIT),
            (AssignmentStatus.REJECTED, LifecycleEvent.SUBMIT, AssignmentStatus.RESUBMITTED),
            (AssignmentStatus.COMPLETED, LifecycleEvent.APPROVE, AssignmentStatus.APPROVED),
            (AssignmentStatus.LATESUBMIT, LifecycleEvent.REJECT, AssignmentStatus.REJECTED),
            (AssignmentStatus.RESUBMITTED, LifecycleEvent.APPROVE, AssignmentStatus.APPROVED),
        ],
    )
    def test_documented_transitions(
        self,
        current: AssignmentStatus,
        event: LifecycleEvent,
        expected: AssignmentStatus,
    ) -> None:
        assert TRANSITION_MATRIX[current][event] == expected

    def test_submittable_statuses(self) -> None:
        assert SUBMITTABLE_STATUSES == {
            AssignmentStatus.IN_PROGRESS,
            AssignmentStatus.INCOMPLETE,
            AssignmentStatus.REJECTED,
        }

    def test_reviewable_statuses(self) -> None:
        assert REVIEWABLE_STATUSES == {
            AssignmentStatus.COMPLETED,
            AssignmentStatus.LATESUBMIT,
            AssignmentStatus.RESUBMITTED,
        }

    def test_approved_is_terminal(self) -> None:
        assert AssignmentStatus.APPROVED.is_terminal()
        assert AssignmentStatus.APPROVED.allowed_events() == frozenset()

    def test_pending_is_never_a_target(self) -> None:
        targets = {t for events in TRANSITION_MATRIX.values() for t in events.values()}
        assert AssignmentStatus.PENDING not in targets

    def test_rejected_is_not_terminal(self) -> None:
        assert not AssignmentStatus.REJECTED.is_terminal()
        assert AssignmentStatus.REJECTED.allowed_events() == {LifecycleEvent.SUBMIT}


class TestAssignment:
    """Tests for the Assignment dataclass."""

    def test_is_frozen(self) -> None:
        assignment = _assignment()
        with pytest.raises(AttributeError):
            assignment.status = AssignmentStatus.APPROVED  # type: ignore[misc]

    def test_with_status_returns_new_instance(self) -> None:
        assignment = _assignment()
        later = datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc)

        updated = assignment.with_status(AssignmentStatus.INCOMPLETE, updated_at=later)

        assert updated is not assignment
        assert updated.status == AssignmentStatus.INCOMPLETE
        assert updated.updated_at == later
        assert assignment.status == AssignmentStatus.IN_PROGRESS

    def test_with_status_keeps_remarks_unless_given(self) -> None:
        reviewed = _assignment(AssignmentStatus.COMPLETED).with_status(
            AssignmentStatus.REJECTED, updated_at=NOW, remarks_by_admin="redo"
        )
        resubmitted = reviewed.with_status(AssignmentStatus.RESUBMITTED, updated_at=NOW)

        assert reviewed.remarks_by_admin == "redo"
        assert resubmitted.remarks_by_admin == "redo"


class TestReviewDecision:
    def test_decision_events(self) -> None:
        assert ReviewDecision.APPROVED.event is LifecycleEvent.APPROVE
        assert ReviewDecision.REJECTED.event is LifecycleEvent.REJECT


class TestMember:
    def test_display_name(self) -> None:
        member = Member(
            id=uuid4(),
            email="ada@example.com",
            first_name="Ada",
            last_name="Lovelace",
            role=Role.SUPERVISOR,
        )
        assert member.display_name == "Ada Lovelace"
        assert member.is_supervisor
