"""Assignment API routes.

Thin FastAPI layer over AssignmentLifecycleService and
AssignmentQueryService. Domain errors become RFC 7807 problem details:

    AuthorizationError        -> 403
    NotFoundError             -> 404
    ConflictError             -> 409
    TransitionNotAllowedError -> 409 (with current_status, operation)
    ValidationError           -> 400
    InternalFailureError      -> 500
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from assignflow.api.dependencies.assignments import (
    get_current_member,
    get_lifecycle_service,
    get_query_service,
)
from assignflow.api.models.assignment import (
    AssignmentListResponse,
    AssignmentResponse,
    CreateAssignmentRequest,
    MemberResponse,
    ProblemDetailResponse,
    ReviewSubmissionRequest,
    SubmissionResponse,
    SubmitWorkRequest,
    WorkItemResponse,
)
from assignflow.application.services.assignment_lifecycle_service import (
    AssignmentLifecycleService,
)
from assignflow.application.services.assignment_query_service import (
    AssignmentQueryService,
)
from assignflow.domain.errors import (
    AuthorizationError,
    ConflictError,
    InternalFailureError,
    NotFoundError,
    TransitionNotAllowedError,
    ValidationError,
)
from assignflow.domain.exceptions import AssignflowError
from assignflow.domain.models.member import Member

router = APIRouter(prefix="/v1", tags=["assignments"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ProblemDetailResponse, "description": "Invalid input"},
    401: {"model": ProblemDetailResponse, "description": "Unknown caller"},
    403: {"model": ProblemDetailResponse, "description": "Caller not permitted"},
    404: {"model": ProblemDetailResponse, "description": "Not found"},
    409: {"model": ProblemDetailResponse, "description": "Conflict or invalid transition"},
}


def _problem(
    request: Request,
    status: int,
    slug: str,
    title: str,
    detail: str,
    **extra: Any,
) -> HTTPException:
    return HTTPException(
        status_code=status,
        detail={
            "type": f"urn:assignflow:assignment:{slug}",
            "title": title,
            "status": status,
            "detail": detail,
            "instance": str(request.url),
            **extra,
        },
    )


def _raise_problem(request: Request, error: AssignflowError) -> NoReturn:
    """Translate a domain error into an HTTPException."""
    if isinstance(error, TransitionNotAllowedError):
        raise _problem(
            request,
            409,
            "transition-not-allowed",
            "Transition Not Allowed",
            str(error),
            current_status=error.current_status.value,
            operation=error.operation.value,
        ) from None
    if isinstance(error, AuthorizationError):
        raise _problem(request, 403, "forbidden", "Forbidden", str(error)) from None
    if isinstance(error, NotFoundError):
        raise _problem(request, 404, "not-found", "Not Found", str(error)) from None
    if isinstance(error, ConflictError):
        raise _problem(request, 409, "conflict", "Conflict", str(error)) from None
    if isinstance(error, ValidationError):
        raise _problem(
            request, 400, "validation", "Validation Failed", str(error), field=error.field
        ) from None
    if isinstance(error, InternalFailureError):
        raise _problem(
            request,
            500,
            "internal",
            "Internal Failure",
            f"The {error.operation} operation could not be completed",
        ) from None
    raise _problem(request, 500, "internal", "Internal Failure", str(error)) from None


# =============================================================================
# Lifecycle Endpoints
# =============================================================================


@router.post(
    "/assignments",
    response_model=AssignmentResponse,
    status_code=201,
    responses=_ERROR_RESPONSES,
    summary="Assign a work item to a member",
)
async def create_assignment(
    body: CreateAssignmentRequest,
    request: Request,
    caller: Member = Depends(get_current_member),
    service: AssignmentLifecycleService = Depends(get_lifecycle_service),
) -> AssignmentResponse:
    try:
        assignment = await service.create_assignment(
            actor=caller,
            assignee_id=body.assignee_id,
            work_item_id=body.work_item_id,
            deadline=body.deadline,
            description=body.description,
        )
    except AssignflowError as e:
        _raise_problem(request, e)
    return AssignmentResponse.from_domain(assignment)


@router.post(
    "/assignments/{assignment_id}/submission",
    response_model=AssignmentResponse,
    responses=_ERROR_RESPONSES,
    summary="Submit completed work",
)
async def submit_work(
    assignment_id: UUID,
    body: SubmitWorkRequest,
    request: Request,
    caller: Member = Depends(get_current_member),
    service: AssignmentLifecycleService = Depends(get_lifecycle_service),
) -> AssignmentResponse:
    try:
        assignment = await service.submit_work(
            actor=caller,
            assignment_id=assignment_id,
            remarks=body.remarks,
            artifact_ref=body.artifact_ref,
        )
    except AssignflowError as e:
        _raise_problem(request, e)
    return AssignmentResponse.from_domain(assignment)


@router.post(
    "/assignments/{assignment_id}/review",
    response_model=AssignmentResponse,
    responses=_ERROR_RESPONSES,
    summary="Approve or reject a submission",
)
async def review_submission(
    assignment_id: UUID,
    body: ReviewSubmissionRequest,
    request: Request,
    caller: Member = Depends(get_current_member),
    service: AssignmentLifecycleService = Depends(get_lifecycle_service),
) -> AssignmentResponse:
    try:
        assignment = await service.review_submission(
            actor=caller,
            assignment_id=assignment_id,
            decision=body.decision,
            remarks_by_admin=body.remarks_by_admin,
        )
    except AssignflowError as e:
        _raise_problem(request, e)
    return AssignmentResponse.from_domain(assignment)


# =============================================================================
# Query Endpoints
# =============================================================================


@router.get(
    "/assignments",
    response_model=AssignmentListResponse,
    responses=_ERROR_RESPONSES,
    summary="List assignments",
    description=(
        "Lists all assignments, or those matching one filter. A filter "
        "that matches nothing returns 404."
    ),
)
async def list_assignments(
    request: Request,
    status: str | None = Query(default=None),
    assignee_id: UUID | None = Query(default=None),
    caller: Member = Depends(get_current_member),
    service: AssignmentQueryService = Depends(get_query_service),
) -> AssignmentListResponse:
    try:
        if status is not None and assignee_id is not None:
            raise ValidationError("status", "filter by status or assignee_id, not both")
        if status is not None:
            assignments = await service.list_by_status(status)
        elif assignee_id is not None:
            assignments = await service.list_by_assignee(assignee_id)
        else:
            assignments = await service.list_all()
    except AssignflowError as e:
        _raise_problem(request, e)
    return AssignmentListResponse.from_domain(assignments)


@router.get(
    "/assignments/{assignment_id}",
    response_model=AssignmentResponse,
    responses=_ERROR_RESPONSES,
)
async def get_assignment(
    assignment_id: UUID,
    request: Request,
    caller: Member = Depends(get_current_member),
    service: AssignmentQueryService = Depends(get_query_service),
) -> AssignmentResponse:
    try:
        assignment = await service.get_assignment(assignment_id)
    except AssignflowError as e:
        _raise_problem(request, e)
    return AssignmentResponse.from_domain(assignment)


@router.get(
    "/assignments/{assignment_id}/submission",
    response_model=SubmissionResponse,
    responses=_ERROR_RESPONSES,
)
async def get_submission(
    assignment_id: UUID,
    request: Request,
    caller: Member = Depends(get_current_member),
    service: AssignmentQueryService = Depends(get_query_service),
) -> SubmissionResponse:
    try:
        submission = await service.get_submission(assignment_id)
    except AssignflowError as e:
        _raise_problem(request, e)
    return SubmissionResponse.from_domain(submission)


@router.get(
    "/directory/assignable-members",
    response_model=list[MemberResponse],
    responses=_ERROR_RESPONSES,
    summary="Members who can receive assignments",
)
async def list_assignable_members(
    request: Request,
    caller: Member = Depends(get_current_member),
    service: AssignmentQueryService = Depends(get_query_service),
) -> list[MemberResponse]:
    try:
        members = await service.list_assignable_members()
    except AssignflowError as e:
        _raise_problem(request, e)
    return [MemberResponse.from_domain(m) for m in members]


@router.get(
    "/directory/work-items",
    response_model=list[WorkItemResponse],
    responses=_ERROR_RESPONSES,
    summary="Catalog work items",
)
async def list_work_items(
    request: Request,
    caller: Member = Depends(get_current_member),
    service: AssignmentQueryService = Depends(get_query_service),
) -> list[WorkItemResponse]:
    try:
        work_items = await service.list_work_items()
    except AssignflowError as e:
        _raise_problem(request, e)
    return [WorkItemResponse.from_domain(w) for w in work_items]
