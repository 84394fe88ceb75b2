"""Assignment API request/response models.

Pydantic handles schema validation (types, required fields). Business
validation (decision values, empty remarks) stays in the lifecycle
service so every caller gets the same rules.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, PlainSerializer

from assignflow.domain.models.assignment import Assignment, Submission
from assignflow.domain.models.member import Member, WorkItem

# ISO 8601 with Z suffix
DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(
        lambda v: v.isoformat().replace("+00:00", "Z") if v else None, return_type=str
    ),
]


class CreateAssignmentRequest(BaseModel):
    """Request body for creating an assignment."""

    assignee_id: UUID
    work_item_id: UUID
    deadline: date = Field(description="Calendar day the work is due")
    description: str = Field(default="", max_length=10_000)


class SubmitWorkRequest(BaseModel):
    """Request body for submitting work against an assignment."""

    remarks: str = Field(max_length=10_000)
    artifact_ref: str = Field(
        max_length=2_048,
        description="Opaque reference to the uploaded artifact",
    )


class ReviewSubmissionRequest(BaseModel):
    """Request body for a supervisor's review decision."""

    decision: str = Field(description="APPROVED or REJECTED")
    remarks_by_admin: str = Field(max_length=10_000)


class AssignmentResponse(BaseModel):
    id: UUID
    assignee_id: UUID
    work_item_id: UUID
    deadline: date
    status: str
    description: str
    assigned_by: str
    remarks_by_admin: str | None
    created_at: DateTimeWithZ
    updated_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, assignment: Assignment) -> AssignmentResponse:
        return cls(
            id=assignment.id,
            assignee_id=assignment.assignee_id,
            work_item_id=assignment.work_item_id,
            deadline=assignment.deadline,
            status=assignment.status.value,
            description=assignment.description,
            assigned_by=assignment.assigned_by,
            remarks_by_admin=assignment.remarks_by_admin,
            created_at=assignment.created_at,
            updated_at=assignment.updated_at,
        )


class AssignmentListResponse(BaseModel):
    items: list[AssignmentResponse]
    count: int

    @classmethod
    def from_domain(cls, assignments: list[Assignment]) -> AssignmentListResponse:
        return cls(
            items=[AssignmentResponse.from_domain(a) for a in assignments],
            count=len(assignments),
        )


class SubmissionResponse(BaseModel):
    id: UUID
    assignment_id: UUID
    submitted_at: DateTimeWithZ
    remarks: str
    artifact_ref: str

    @classmethod
    def from_domain(cls, submission: Submission) -> SubmissionResponse:
        return cls(
            id=submission.id,
            assignment_id=submission.assignment_id,
            submitted_at=submission.submitted_at,
            remarks=submission.remarks,
            artifact_ref=submission.artifact_ref,
        )


class MemberResponse(BaseModel):
    id: UUID
    email: str
    first_name: str
    last_name: str

    @classmethod
    def from_domain(cls, member: Member) -> MemberResponse:
        return cls(
            id=member.id,
            email=member.email,
            first_name=member.first_name,
            last_name=member.last_name,
        )


class WorkItemResponse(BaseModel):
    id: UUID
    name: str

    @classmethod
    def from_domain(cls, work_item: WorkItem) -> WorkItemResponse:
        return cls(id=work_item.id, name=work_item.name)


class ProblemDetailResponse(BaseModel):
    """RFC 7807 problem details."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
