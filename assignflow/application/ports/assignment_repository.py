"""Assignment repository port.

This module defines the storage contract for assignments and their
submissions. Every status change is a conditional write: the store
re-checks the expected status inside the same atomic unit that applies
the change, so of two writers starting from the same status exactly one
succeeds.

Rules for implementations:
1. FAIL LOUD - raise on errors; never return partial results.
2. CAS FOR STATUS - every status write names the status it expects.
3. ONE UNIT - a submission upsert and its status change commit together
   or not at all.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from assignflow.domain.models.assignment import (
    Assignment,
    AssignmentStatus,
    Submission,
)


class AssignmentRepositoryProtocol(Protocol):
    """Protocol for assignment storage operations.

    Implementations may use PostgreSQL, in-memory storage, or other
    backends.
    """

    async def add(self, assignment: Assignment) -> None:
        """Store a new assignment.

        Args:
            assignment: The assignment to store.

        Raises:
            DuplicateAssignmentError: If an assignment already exists for
                the same (assignee_id, work_item_id) pair.
        """
        ...

    async def get(self, assignment_id: UUID) -> Assignment | None:
        """Retrieve an assignment by id, or None if it does not exist."""
        ...

    async def find_by_assignee_and_work_item(
        self,
        assignee_id: UUID,
        work_item_id: UUID,
    ) -> Assignment | None:
        """Retrieve the assignment for an (assignee, work item) pair, if any."""
        ...

    async def get_submission(self, assignment_id: UUID) -> Submission | None:
        """Retrieve the live submission for an assignment, if any."""
        ...

    async def transition_due_assignments(
        self,
        deadline: date,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        updated_at: datetime,
    ) -> int:
        """Bulk conditional status update.

        Sets ``new_status`` on every assignment whose deadline equals
        ``deadline`` and whose status is ``expected_status`` at write time.

        Returns:
            Number of assignments transitioned.
        """
        ...

    async def record_submission(
        self,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        submission: Submission,
        updated_at: datetime,
    ) -> Assignment:
        """Atomically change status and upsert the assignment's submission.

        The submission is keyed by ``assignment_id``: an existing record
        is overwritten in place (keeping its id), otherwise ``submission``
        is inserted.

        Returns:
            The updated assignment.

        Raises:
            AssignmentNotFoundError: If the assignment does not exist.
            ConcurrentModificationError: If the status is no longer
                ``expected_status``. Nothing is written.
        """
        ...

    async def record_review(
        self,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        remarks_by_admin: str,
        updated_at: datetime,
    ) -> Assignment:
        """Atomically change status and set the supervisor's remarks.

        Returns:
            The updated assignment.

        Raises:
            AssignmentNotFoundError: If the assignment does not exist.
            ConcurrentModificationError: If the status is no longer
                ``expected_status``. Nothing is written.
        """
        ...

    async def list_all(self) -> list[Assignment]:
        """List every assignment, newest first."""
        ...

    async def list_by_assignee(self, assignee_id: UUID) -> list[Assignment]:
        """List assignments for one assignee, newest first."""
        ...

    async def list_by_status(self, status: AssignmentStatus) -> list[Assignment]:
        """List assignments in one status, newest first."""
        ...
