"""Member directory port.

Read-only view over the members and work items owned by account
management and the work catalog.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from assignflow.domain.models.member import Member, WorkItem


class MemberDirectoryProtocol(Protocol):
    """Protocol for directory lookups used by the lifecycle engine."""

    async def get_member(self, member_id: UUID) -> Member | None:
        """Retrieve a member by id, or None if unknown."""
        ...

    async def get_work_item(self, work_item_id: UUID) -> WorkItem | None:
        """Retrieve a catalog work item by id, or None if unknown."""
        ...

    async def list_assignable_members(self) -> list[Member]:
        """List members holding the ASSIGNEE role, ordered by first name."""
        ...

    async def list_work_items(self) -> list[WorkItem]:
        """List all catalog work items, ordered by name."""
        ...
