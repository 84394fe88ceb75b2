"""PostgreSQL member directory.

Read-only lookups over the ``members`` and ``work_items`` tables.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from assignflow.application.ports.member_directory import MemberDirectoryProtocol
from assignflow.domain.models.member import Member, Role, WorkItem


def _row_to_member(row: Any) -> Member:
    return Member(
        id=row["id"],
        email=row["email"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        role=Role(row["role"]),
    )


def _row_to_work_item(row: Any) -> WorkItem:
    return WorkItem(id=row["id"], name=row["name"], description=row["description"])


class PostgresMemberDirectory(MemberDirectoryProtocol):
    """PostgreSQL implementation of MemberDirectoryProtocol."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_member(self, member_id: UUID) -> Member | None:
        async with self._session_factory() as session:
            result = await session.execute(
                text("""
                    SELECT id, email, first_name, last_name, role
                    FROM members
                    WHERE id = :id
                """),
                {"id": member_id},
            )
            row = result.mappings().fetchone()
        return _row_to_member(row) if row else None

    async def get_work_item(self, work_item_id: UUID) -> WorkItem | None:
        async with self._session_factory() as session:
            result = await session.execute(
                text("SELECT id, name, description FROM work_items WHERE id = :id"),
                {"id": work_item_id},
            )
            row = result.mappings().fetchone()
        return _row_to_work_item(row) if row else None

    async def list_assignable_members(self) -> list[Member]:
        async with self._session_factory() as session:
            result = await session.execute(
                text("""
                    SELECT id, email, first_name, last_name, role
                    FROM members
                    WHERE role = :role
                    ORDER BY first_name ASC
                """),
                {"role": Role.ASSIGNEE.value},
            )
            rows = result.mappings().fetchall()
        return [_row_to_member(row) for row in rows]

    async def list_work_items(self) -> list[WorkItem]:
        async with self._session_factory() as session:
            result = await session.execute(
                text("SELECT id, name, description FROM work_items ORDER BY name ASC")
            )
            rows = result.mappings().fetchall()
        return [_row_to_work_item(row) for row in rows]
