"""Assignment API dependencies.

Service singletons are built from the bootstrap wiring on first use.
Tests override them through ``app.dependency_overrides``.

The caller is identified by the ``X-Member-Id`` header and resolved
through the member directory; credential checks happen upstream.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request

from assignflow.application.ports.member_directory import MemberDirectoryProtocol
from assignflow.application.services.assignment_lifecycle_service import (
    AssignmentLifecycleService,
)
from assignflow.application.services.assignment_query_service import (
    AssignmentQueryService,
)
from assignflow.application.services.deadline_sweeper import DeadlineSweeper
from assignflow.bootstrap import assignments as wiring
from assignflow.domain.models.member import Member

MEMBER_HEADER = "X-Member-Id"

_lifecycle_service: AssignmentLifecycleService | None = None
_query_service: AssignmentQueryService | None = None
_deadline_sweeper: DeadlineSweeper | None = None


def get_member_directory() -> MemberDirectoryProtocol:
    return wiring.get_member_directory()


def get_lifecycle_service() -> AssignmentLifecycleService:
    global _lifecycle_service
    if _lifecycle_service is None:
        _lifecycle_service = wiring.build_lifecycle_service()
    return _lifecycle_service


def get_query_service() -> AssignmentQueryService:
    global _query_service
    if _query_service is None:
        _query_service = wiring.build_query_service()
    return _query_service


def get_deadline_sweeper() -> DeadlineSweeper:
    """Get the sweeper bound to the API's lifecycle service."""
    global _deadline_sweeper
    if _deadline_sweeper is None:
        _deadline_sweeper = wiring.build_deadline_sweeper(get_lifecycle_service())
    return _deadline_sweeper


def _unauthenticated(request: Request, detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail={
            "type": "urn:assignflow:auth:unauthenticated",
            "title": "Unauthenticated",
            "status": 401,
            "detail": detail,
            "instance": str(request.url),
        },
    )


async def get_current_member(
    request: Request,
    member_id: str | None = Header(default=None, alias=MEMBER_HEADER),
    directory: MemberDirectoryProtocol = Depends(get_member_directory),
) -> Member:
    """Resolve the calling member from the ``X-Member-Id`` header.

    Raises:
        HTTPException: 401 if the header is missing, malformed or unknown.
    """
    if not member_id:
        raise _unauthenticated(request, f"{MEMBER_HEADER} header is required")
    try:
        parsed = UUID(member_id)
    except ValueError:
        raise _unauthenticated(request, f"{MEMBER_HEADER} must be a UUID") from None
    member = await directory.get_member(parsed)
    if member is None:
        raise _unauthenticated(request, f"Unknown member {parsed}")
    return member


def reset_assignment_api_dependencies() -> None:
    """Reset singletons (for testing)."""
    global _lifecycle_service, _query_service, _deadline_sweeper
    _lifecycle_service = None
    _query_service = None
    _deadline_sweeper = None
