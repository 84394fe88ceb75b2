"""In-memory stub adapters for development and testing."""

from assignflow.infrastructure.stubs.assignment_repository_stub import (
    AssignmentRepositoryStub,
)
from assignflow.infrastructure.stubs.member_directory_stub import MemberDirectoryStub

__all__ = ["AssignmentRepositoryStub", "MemberDirectoryStub"]
