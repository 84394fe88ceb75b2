"""Unit tests for the domain error taxonomy."""

from uuid import uuid4

import pytest

from assignflow.domain.errors import (
    AssignmentNotFoundError,
    AuthorizationError,
    ConcurrentModificationError,
    ConflictError,
    DuplicateAssignmentError,
    InternalFailureError,
    NoMatchingAssignmentsError,
    NotFoundError,
    TransitionNotAllowedError,
    ValidationError,
)
from assignflow.domain.exceptions import AssignflowError
from assignflow.domain.models.assignment import AssignmentStatus, LifecycleOperation


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            AuthorizationError(uuid4(), "review", "requires role SUPERVISOR"),
            AssignmentNotFoundError(uuid4()),
            DuplicateAssignmentError(uuid4(), uuid4()),
            TransitionNotAllowedError(AssignmentStatus.APPROVED, LifecycleOperation.SUBMIT),
            ValidationError("decision", "unknown"),
            InternalFailureError("submit_work"),
        ],
    )
    def test_all_errors_share_base(self, error: Exception) -> None:
        assert isinstance(error, AssignflowError)

    def test_not_found_family(self) -> None:
        assert isinstance(NoMatchingAssignmentsError("status", "APPROVED"), NotFoundError)

    def test_duplicate_is_conflict(self) -> None:
        assert isinstance(DuplicateAssignmentError(uuid4(), uuid4()), ConflictError)


class TestTransitionNotAllowedError:
    def test_carries_status_and_operation(self) -> None:
        assignment_id = uuid4()
        error = TransitionNotAllowedError(
            AssignmentStatus.APPROVED,
            LifecycleOperation.SUBMIT,
            assignment_id=assignment_id,
        )

        assert error.current_status == AssignmentStatus.APPROVED
        assert error.operation == LifecycleOperation.SUBMIT
        assert error.assignment_id == assignment_id
        assert "APPROVED" in str(error)
        assert "submit" in str(error)


class TestConcurrentModificationError:
    def test_message_names_both_statuses(self) -> None:
        error = ConcurrentModificationError(
            assignment_id=uuid4(),
            expected_status=AssignmentStatus.IN_PROGRESS,
            actual_status=AssignmentStatus.INCOMPLETE,
            operation="record_submission",
        )

        assert "IN_PROGRESS" in str(error)
        assert "INCOMPLETE" in str(error)
        assert error.actual_status == AssignmentStatus.INCOMPLETE
