"""Member directory stub implementation.

In-memory MemberDirectoryProtocol, seeded by tests and by the local
development bootstrap.
"""

from __future__ import annotations

from uuid import UUID

from assignflow.application.ports.member_directory import MemberDirectoryProtocol
from assignflow.domain.models.member import Member, Role, WorkItem


class MemberDirectoryStub(MemberDirectoryProtocol):
    """In-memory stub implementation of MemberDirectoryProtocol."""

    def __init__(
        self,
        members: list[Member] | None = None,
        work_items: list[WorkItem] | None = None,
    ) -> None:
        self._members: dict[UUID, Member] = {m.id: m for m in members or []}
        self._work_items: dict[UUID, WorkItem] = {w.id: w for w in work_items or []}

    def add_member(self, member: Member) -> None:
        self._members[member.id] = member

    def add_work_item(self, work_item: WorkItem) -> None:
        self._work_items[work_item.id] = work_item

    async def get_member(self, member_id: UUID) -> Member | None:
        return self._members.get(member_id)

    async def get_work_item(self, work_item_id: UUID) -> WorkItem | None:
        return self._work_items.get(work_item_id)

    async def list_assignable_members(self) -> list[Member]:
        return sorted(
            (m for m in self._members.values() if m.role is Role.ASSIGNEE),
            key=lambda m: m.first_name,
        )

    async def list_work_items(self) -> list[WorkItem]:
        return sorted(self._work_items.values(), key=lambda w: w.name)

    def clear(self) -> None:
        """Clear all stored data (for testing)."""
        self._members.clear()
        self._work_items.clear()
