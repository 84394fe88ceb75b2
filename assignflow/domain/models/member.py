"""Directory models: members and catalog work items.

Both are owned by external collaborators (account management and the
work catalog). The lifecycle engine only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class Role(Enum):
    """Capability a member holds.

    Roles:
        SUPERVISOR: Creates assignments and reviews submissions.
        ASSIGNEE: Receives assignments and submits work.
    """

    SUPERVISOR = "SUPERVISOR"
    ASSIGNEE = "ASSIGNEE"


@dataclass(frozen=True, eq=True)
class Member:
    """A person known to the directory.

    Attributes:
        id: Member identifier.
        email: Contact address.
        first_name: Given name.
        last_name: Family name.
        role: Capability held by the member.
    """

    id: UUID
    email: str
    first_name: str
    last_name: str
    role: Role

    @property
    def display_name(self) -> str:
        """Full name as recorded in ``Assignment.assigned_by``."""
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_supervisor(self) -> bool:
        return self.role is Role.SUPERVISOR


@dataclass(frozen=True, eq=True)
class WorkItem:
    """A catalog entry that can be assigned."""

    id: UUID
    name: str
    description: str = ""
