"""Ports (interfaces) for the application layer."""

from assignflow.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from assignflow.application.ports.member_directory import MemberDirectoryProtocol
from assignflow.application.ports.time_authority import TimeAuthorityProtocol

__all__ = [
    "AssignmentRepositoryProtocol",
    "MemberDirectoryProtocol",
    "TimeAuthorityProtocol",
]
