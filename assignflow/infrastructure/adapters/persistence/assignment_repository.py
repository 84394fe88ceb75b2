"""PostgreSQL assignment repository.

Implements AssignmentRepositoryProtocol with textual SQL over an
SQLAlchemy async session factory.

SQL Pattern (compare-and-swap):
    UPDATE assignments
    SET status = :new_status, updated_at = :updated_at
    WHERE id = :assignment_id AND status = :expected_status
    RETURNING ...

    No row returned means the assignment is missing or its status moved;
    a follow-up SELECT tells the two apart. The status update and the
    submission upsert share one transaction.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, NoReturn
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

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

logger = get_logger()

PAIR_CONSTRAINT = "uq_assignments_assignee_work_item"

_ASSIGNMENT_COLUMNS = """
    id, assignee_id, work_item_id, deadline, status, description,
    assigned_by, remarks_by_admin, created_at, updated_at
"""


def _row_to_assignment(row: Any) -> Assignment:
    return Assignment(
        id=row["id"],
        assignee_id=row["assignee_id"],
        work_item_id=row["work_item_id"],
        deadline=row["deadline"],
        status=AssignmentStatus(row["status"]),
        description=row["description"],
        assigned_by=row["assigned_by"],
        remarks_by_admin=row["remarks_by_admin"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _row_to_submission(row: Any) -> Submission:
    return Submission(
        id=row["id"],
        assignment_id=row["assignment_id"],
        submitted_at=row["submitted_at"],
        remarks=row["remarks"],
        artifact_ref=row["artifact_ref"],
    )


class PostgresAssignmentRepository(AssignmentRepositoryProtocol):
    """PostgreSQL implementation of AssignmentRepositoryProtocol.

    Attributes:
        _session_factory: SQLAlchemy async session factory.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._log = logger.bind(repository="PostgresAssignmentRepository")

    async def add(self, assignment: Assignment) -> None:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        text(f"""
                            INSERT INTO assignments ({_ASSIGNMENT_COLUMNS})
                            VALUES (
                                :id, :assignee_id, :work_item_id, :deadline, :status,
                                :description, :assigned_by, :remarks_by_admin,
                                :created_at, :updated_at
                            )
                        """),
                        {
                            "id": assignment.id,
                            "assignee_id": assignment.assignee_id,
                            "work_item_id": assignment.work_item_id,
                            "deadline": assignment.deadline,
                            "status": assignment.status.value,
                            "description": assignment.description,
                            "assigned_by": assignment.assigned_by,
                            "remarks_by_admin": assignment.remarks_by_admin,
                            "created_at": assignment.created_at,
                            "updated_at": assignment.updated_at,
                        },
                    )
        except IntegrityError as e:
            if PAIR_CONSTRAINT in str(e.orig):
                raise DuplicateAssignmentError(
                    assignee_id=assignment.assignee_id,
                    work_item_id=assignment.work_item_id,
                ) from e
            raise

    async def get(self, assignment_id: UUID) -> Assignment | None:
        async with self._session_factory() as session:
            result = await session.execute(
                text(f"SELECT {_ASSIGNMENT_COLUMNS} FROM assignments WHERE id = :id"),
                {"id": assignment_id},
            )
            row = result.mappings().fetchone()
        return _row_to_assignment(row) if row else None

    async def find_by_assignee_and_work_item(
        self,
        assignee_id: UUID,
        work_item_id: UUID,
    ) -> Assignment | None:
        async with self._session_factory() as session:
            result = await session.execute(
                text(f"""
                    SELECT {_ASSIGNMENT_COLUMNS}
                    FROM assignments
                    WHERE assignee_id = :assignee_id AND work_item_id = :work_item_id
                """),
                {"assignee_id": assignee_id, "work_item_id": work_item_id},
            )
            row = result.mappings().fetchone()
        return _row_to_assignment(row) if row else None

    async def get_submission(self, assignment_id: UUID) -> Submission | None:
        async with self._session_factory() as session:
            result = await session.execute(
                text("""
                    SELECT id, assignment_id, submitted_at, remarks, artifact_ref
                    FROM assignment_submissions
                    WHERE assignment_id = :assignment_id
                """),
                {"assignment_id": assignment_id},
            )
            row = result.mappings().fetchone()
        return _row_to_submission(row) if row else None

    async def transition_due_assignments(
        self,
        deadline: date,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        updated_at: datetime,
    ) -> int:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    text("""
                        UPDATE assignments
                        SET status = :new_status, updated_at = :updated_at
                        WHERE status = :expected_status AND deadline = :deadline
                    """),
                    {
                        "new_status": new_status.value,
                        "expected_status": expected_status.value,
                        "deadline": deadline,
                        "updated_at": updated_at,
                    },
                )
        return result.rowcount or 0

    async def _cas_status(
        self,
        session: AsyncSession,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        updated_at: datetime,
        operation: str,
        remarks_by_admin: str | None = None,
    ) -> Assignment:
        result = await session.execute(
            text(f"""
                UPDATE assignments
                SET status = :new_status,
                    updated_at = :updated_at,
                    remarks_by_admin = COALESCE(CAST(:remarks_by_admin AS TEXT), remarks_by_admin)
                WHERE id = :assignment_id AND status = :expected_status
                RETURNING {_ASSIGNMENT_COLUMNS}
            """),
            {
                "assignment_id": assignment_id,
                "expected_status": expected_status.value,
                "new_status": new_status.value,
                "updated_at": updated_at,
                "remarks_by_admin": remarks_by_admin,
            },
        )
        row = result.mappings().fetchone()
        if row is None:
            await self._raise_cas_failure(session, assignment_id, expected_status, operation)
        return _row_to_assignment(row)

    async def _raise_cas_failure(
        self,
        session: AsyncSession,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        operation: str,
    ) -> NoReturn:
        result = await session.execute(
            text("SELECT status FROM assignments WHERE id = :id"),
            {"id": assignment_id},
        )
        actual = result.scalar()
        if actual is None:
            raise AssignmentNotFoundError(assignment_id)
        self._log.info(
            "cas_update_rejected",
            assignment_id=str(assignment_id),
            expected_status=expected_status.value,
            actual_status=actual,
            operation=operation,
        )
        raise ConcurrentModificationError(
            assignment_id=assignment_id,
            expected_status=expected_status,
            actual_status=AssignmentStatus(actual),
            operation=operation,
        )

    async def record_submission(
        self,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        submission: Submission,
        updated_at: datetime,
    ) -> Assignment:
        async with self._session_factory() as session:
            async with session.begin():
                updated = await self._cas_status(
                    session,
                    assignment_id,
                    expected_status,
                    new_status,
                    updated_at,
                    operation="record_submission",
                )
                # Keyed by assignment: a resubmission keeps the stored id
                await session.execute(
                    text("""
                        INSERT INTO assignment_submissions
                            (id, assignment_id, submitted_at, remarks, artifact_ref)
                        VALUES
                            (:id, :assignment_id, :submitted_at, :remarks, :artifact_ref)
                        ON CONFLICT (assignment_id) DO UPDATE
                        SET submitted_at = EXCLUDED.submitted_at,
                            remarks = EXCLUDED.remarks,
                            artifact_ref = EXCLUDED.artifact_ref
                    """),
                    {
                        "id": submission.id,
                        "assignment_id": assignment_id,
                        "submitted_at": submission.submitted_at,
                        "remarks": submission.remarks,
                        "artifact_ref": submission.artifact_ref,
                    },
                )
        return updated

    async def record_review(
        self,
        assignment_id: UUID,
        expected_status: AssignmentStatus,
        new_status: AssignmentStatus,
        remarks_by_admin: str,
        updated_at: datetime,
    ) -> Assignment:
        async with self._session_factory() as session:
            async with session.begin():
                return await self._cas_status(
                    session,
                    assignment_id,
                    expected_status,
                    new_status,
                    updated_at,
                    operation="record_review",
                    remarks_by_admin=remarks_by_admin,
                )

    async def _list(self, where: str, params: dict[str, Any]) -> list[Assignment]:
        async with self._session_factory() as session:
            result = await session.execute(
                text(f"""
                    SELECT {_ASSIGNMENT_COLUMNS}
                    FROM assignments
                    {where}
                    ORDER BY created_at DESC
                """),
                params,
            )
            rows = result.mappings().fetchall()
        return [_row_to_assignment(row) for row in rows]

    async def list_all(self) -> list[Assignment]:
        return await self._list("", {})

    async def list_by_assignee(self, assignee_id: UUID) -> list[Assignment]:
        return await self._list(
            "WHERE assignee_id = :assignee_id", {"assignee_id": assignee_id}
        )

    async def list_by_status(self, status: AssignmentStatus) -> list[Assignment]:
        return await self._list("WHERE status = :status", {"status": status.value})
