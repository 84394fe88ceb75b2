"""Assignment repository stub implementation.

In-memory implementation of AssignmentRepositoryProtocol. Every write
takes one asyncio.Lock, re-checks its preconditions under it and only
then mutates, which gives the same all-or-nothing CAS semantics the
PostgreSQL adapter gets from ``UPDATE ... WHERE status = :expected``.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import date, datetime
from uuid import UUID

from assignflow.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from assignflow.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from assignflow.domain.errors.conflict import DuplicateAssignmentError
from assignflow.domain.errors.not_found import AssignmentNotFoundError
from assignflow.domain.models.assignment import (
    Assignment,
    AssignmentStatus,
    Submission,
)


def _newest_first(assignments: list[Assignment]) -> list[Assignment]:
    return sorted(assignments, key=lambda a: a.created_at, reverse=True)


class AssignmentRepositoryStub(AssignmentRepositoryProtocol):
    """In-memory stub implementation of AssignmentRepositoryProtocol.

    NOT suitable for production use.

    Attributes:
        _assignments: Assignment id -> Assignment.
        _pairs: (assignee_id, work_item_id) -> assignment id.
        _submissions: Assignment id -> its single live Submission.
    """

    def __init__(self) -> None:
        self._assignments: dict[UUID, Assignment] = {}
        self._pairs: dict[tuple[UUID, UUID], UUID] = {}
        self._submissions: dict[UUID, Submission] = {}
        self._cas_lock = asyncio.Lock()

    async def add(self, assignment: Assignment) -> None:
        async with self._cas_lock:
            key = (assignment.assignee_id, assignment.work_item_id)
            existing_id = self._pairs.get(key)
            if existing_id is not None:
                raise DuplicateAssignmentError(
                    assignee_id=assignment.assignee_id,
                    work_item_id=assignment.work_item_id,
                    existing_assignment_id=existing_id,
                )
            if assignment.id in self._assignments:
                raise ValueError(f"Assignment already exists: {assignment.id}")
            self._assignments[assignment.id] = assignment
            self._pairs[key] = assignment.id

    async def get(self, assignment_id: UUID) -> Assignment | None:
        return self._assignments.get(assignment_id)

    async def find_by_assignee_and_work_item(
        self,
        assignee_id: UUID,
        work_item_id: UUID,
    ) -> Assignment | None:
        assignment_id = self._pairs.get((assignee_id, work_item_id))
        if assignment_id is None:
            return None
        return self._assignments.get(assignment_id)

    async def get_submission(self, assignment_id: UUID) -> Submission | None:
        return self._submissions.get(assignment_id)

    async def transition_due_assignments(
        self,
        deadline: date,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        updated_at: datetime,
    ) -> int:
        async with self._cas_lock:
            due = [
                a
                for a in self._assignments.values()
                if a.deadline == deadline and a.status == expected_status
            ]
            for assignment in due:
                self._assignments[assignment.id] = assignment.with_status(
                    new_status, updated_at=updated_at
                )
            return len(due)

    def _require_status(
        self,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        operation: str,
    ) -> Assignment:
        current = self._assignments.get(assignment_id)
        if current is None:
            raise AssignmentNotFoundError(assignment_id)
        if current.status != expected_status:
            raise ConcurrentModificationError(
                assignment_id=assignment_id,
                expected_status=expected_status,
                actual_status=current.status,
                operation=operation,
            )
        return current

    async def record_submission(
        self,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        submission: Submission,
        updated_at: datetime,
    ) -> Assignment:
        async with self._cas_lock:
            current = self._require_status(
                assignment_id, expected_status, "record_submission"
            )
            existing = self._submissions.get(assignment_id)
            stored = replace(
                submission,
                id=existing.id if existing is not None else submission.id,
                assignment_id=assignment_id,
            )
            updated = current.with_status(new_status, updated_at=updated_at)
            self._submissions[assignment_id] = stored
            self._assignments[assignment_id] = updated
            return updated

    async def record_review(
        self,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        remarks_by_admin: str,
        updated_at: datetime,
    ) -> Assignment:
        async with self._cas_lock:
            current = self._require_status(assignment_id, expected_status, "record_review")
            updated = current.with_status(
                new_status,
                updated_at=updated_at,
                remarks_by_admin=remarks_by_admin,
            )
            self._assignments[assignment_id] = updated
            return updated

    async def list_all(self) -> list[Assignment]:
        return _newest_first(list(self._assignments.values()))

    async def list_by_assignee(self, assignee_id: UUID) -> list[Assignment]:
        return _newest_first(
            [a for a in self._assignments.values() if a.assignee_id == assignee_id]
        )

    async def list_by_status(self, status: AssignmentStatus) -> list[Assignment]:
        return _newest_first(
            [a for a in self._assignments.values() if a.status == status]
        )

    # Test helpers

    def clear(self) -> None:
        """Clear all stored data (for testing)."""
        self._assignments.clear()
        self._pairs.clear()
        self._submissions.clear()

    def submission_count(self) -> int:
        """Number of stored submissions (for testing)."""
        return len(self._submissions)
