"""Assignment lifecycle service.

The single entry point for every status change: creation, the deadline
sweep, submission and review. Each operation reads the current status,
resolves the target through the transition matrix and applies it with
a conditional write naming the status it read. If another writer got
there first the store raises ConcurrentModificationError and the caller
receives TransitionNotAllowedError carrying the winner's status.

Check order for submit and review:
    load -> transition allowed -> caller authorized -> input valid -> write

so an operation on a status that cannot accept it fails the same way
for every caller.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from assignflow.application.ports.assignment_repository import (
    AssignmentRepositoryProtocol,
)
from assignflow.application.ports.member_directory import MemberDirectoryProtocol
from assignflow.application.ports.time_authority import TimeAuthorityProtocol
from assignflow.application.services.base import LoggingMixin, internal_failure_guard
from assignflow.config.lifecycle_config import DEFAULT_LIFECYCLE_CONFIG, LifecycleConfig
from assignflow.domain.errors import (
    AssignmentNotFoundError,
    AuthorizationError,
    ConcurrentModificationError,
    DuplicateAssignmentError,
    MemberNotFoundError,
    TransitionNotAllowedError,
    ValidationError,
    WorkItemNotFoundError,
)
from assignflow.domain.models.assignment import (
    REVIEWABLE_STATUSES,
    Assignment,
    AssignmentStatus,
    LifecycleEvent,
    LifecycleOperation,
    ReviewDecision,
    Submission,
)
from assignflow.domain.models.member import Member, Role
from assignflow.domain.services.assignment_transitions import (
    SubmissionWriteMode,
    initial_status,
    is_past_cutoff,
    next_status,
    submission_write_mode,
)


def _require_text(field: str, value: str | None) -> str:
    """Reject missing or blank text; the value is returned exactly as given."""
    if value is None or not value.strip():
        raise ValidationError(field, "must not be empty")
    return value


def _parse_decision(decision: ReviewDecision | str) -> ReviewDecision:
    if isinstance(decision, ReviewDecision):
        return decision
    for candidate in ReviewDecision:
        if decision == candidate.value:
            return candidate
    raise ValidationError(
        "decision",
        f"must be one of {[d.value for d in ReviewDecision]}, got {decision!r}",
    )


class AssignmentLifecycleService(LoggingMixin):
    """Applies lifecycle transitions to stored assignments.

    Example:
        >>> service = AssignmentLifecycleService(repo, directory, time_authority)
        >>> assignment = await service.create_assignment(
        ...     supervisor, assignee_id, work_item_id, date(2026, 3, 2), "Draft"
        ... )
        >>> await service.sweep_overdue()
        0
    """

    def __init__(
        self,
        repository: AssignmentRepositoryProtocol,
        directory: MemberDirectoryProtocol,
        time_authority: TimeAuthorityProtocol,
        config: LifecycleConfig = DEFAULT_LIFECYCLE_CONFIG,
    ) -> None:
        """Initialize the lifecycle service.

        Args:
            repository: Assignment store.
            directory: Member and work item lookups.
            time_authority: Source of "now" (inject a fake in tests).
            config: Cutoff and timezone settings.
        """
        self._repository = repository
        self._directory = directory
        self._time = time_authority
        self._config = config
        self._init_logger()

    @property
    def config(self) -> LifecycleConfig:
        return self._config

    def _local(self, now: datetime | None = None) -> datetime:
        """Express ``now`` (default: the time authority) in the business timezone.

        Naive datetimes are taken to be business-local already. A ``None``
        zone is the host's local zone.
        """
        zone = self._config.business_timezone
        if now is None:
            return self._time.now_in(zone)
        if now.tzinfo is None and zone is not None:
            return now.replace(tzinfo=zone)
        return now.astimezone(zone)

    @staticmethod
    def _require_role(actor: Member, role: Role, operation: LifecycleOperation) -> None:
        if actor.role is not role:
            raise AuthorizationError(
                actor_id=actor.id,
                operation=operation.value.lower(),
                reason=f"requires role {role.value}",
            )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_assignment(
        self,
        actor: Member,
        assignee_id: UUID,
        work_item_id: UUID,
        deadline: date,
        description: str,
    ) -> Assignment:
        """Create an assignment for an assignee and a catalog work item.

        Runs an opportunistic sweep first so that stale IN_PROGRESS rows
        are settled before the new one is written.

        Args:
            actor: Calling member; must be a supervisor.
            assignee_id: Member receiving the work; must not be a supervisor.
            work_item_id: Catalog item being assigned.
            deadline: Calendar day the work is due.
            description: Free-text instructions.

        Returns:
            The stored assignment, IN_PROGRESS or INCOMPLETE.

        Raises:
            AuthorizationError: Caller is not a supervisor.
            ValidationError: Bad deadline/description, or assignee is a supervisor.
            MemberNotFoundError: Unknown assignee.
            WorkItemNotFoundError: Unknown work item.
            DuplicateAssignmentError: Pair already assigned (any status).
            InternalFailureError: Unexpected store failure.
        """
        log = self._log_operation(
            "create_assignment",
            actor_id=str(actor.id),
            assignee_id=str(assignee_id),
            work_item_id=str(work_item_id),
        )
        self._require_role(actor, Role.SUPERVISOR, LifecycleOperation.CREATE)
        if isinstance(deadline, datetime) or not isinstance(deadline, date):
            raise ValidationError("deadline", "must be a calendar date")
        if description is None:
            raise ValidationError("description", "must be provided")

        with internal_failure_guard("create_assignment", log):
            now_local = self._local()
            await self.sweep_overdue(now_local)

            assignee = await self._directory.get_member(assignee_id)
            if assignee is None:
                raise MemberNotFoundError(assignee_id)
            if assignee.role is Role.SUPERVISOR:
                raise ValidationError("assignee_id", "supervisors cannot be assigned work")

            work_item = await self._directory.get_work_item(work_item_id)
            if work_item is None:
                raise WorkItemNotFoundError(work_item_id)

            existing = await self._repository.find_by_assignee_and_work_item(
                assignee_id, work_item_id
            )
            if existing is not None:
                log.info(
                    "assignment_rejected_duplicate",
                    existing_assignment_id=str(existing.id),
                    existing_status=existing.status.value,
                )
                raise DuplicateAssignmentError(
                    assignee_id=assignee_id,
                    work_item_id=work_item_id,
                    existing_assignment_id=existing.id,
                )

            status = initial_status(deadline, now_local, self._config.cutoff_time)
            now_utc = now_local.astimezone(timezone.utc)
            assignment = Assignment(
                id=uuid4(),
                assignee_id=assignee_id,
                work_item_id=work_item_id,
                deadline=deadline,
                status=status,
                description=description,
                assigned_by=actor.display_name,
                created_at=now_utc,
                updated_at=now_utc,
            )
            await self._repository.add(assignment)

        log.info(
            "assignment_created",
            assignment_id=str(assignment.id),
            status=status.value,
            deadline=deadline.isoformat(),
        )
        return assignment

    # ------------------------------------------------------------------
    # Sweep
    # ------------------------------------------------------------------

    async def sweep_overdue(self, now: datetime | None = None) -> int:
        """Move today's unsubmitted assignments to INCOMPLETE once past cutoff.

        Idempotent: the bulk update only matches rows still IN_PROGRESS,
        so a repeated call transitions nothing.

        Args:
            now: Moment to evaluate (default: the time authority).

        Returns:
            Number of assignments transitioned; 0 before the cutoff.
        """
        now_local = self._local(now)
        today = now_local.date()
        log = self._log_operation("sweep_overdue", local_date=today.isoformat())

        if not is_past_cutoff(now_local, self._config.cutoff_time):
            log.debug("sweep_skipped_before_cutoff")
            return 0

        target = next_status(
            AssignmentStatus.IN_PROGRESS,
            LifecycleEvent.DEADLINE_PASSED,
            LifecycleOperation.SWEEP,
        )
        with internal_failure_guard("sweep_overdue", log):
            count = await self._repository.transition_due_assignments(
                deadline=today,
                expected_status=AssignmentStatus.IN_PROGRESS,
                new_status=target,
                updated_at=now_local.astimezone(timezone.utc),
            )

        if count:
            log.info("sweep_completed", transitioned=count)
        else:
            log.debug("sweep_completed", transitioned=0)
        return count

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    async def _load(self, assignment_id: UUID) -> Assignment:
        assignment = await self._repository.get(assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(assignment_id)
        return assignment

    async def submit_work(
        self,
        actor: Member,
        assignment_id: UUID,
        remarks: str,
        artifact_ref: str,
    ) -> Assignment:
        """Record the assignee's work and advance the status.

        IN_PROGRESS -> COMPLETED, INCOMPLETE -> LATESUBMIT (new submission);
        REJECTED -> RESUBMITTED (existing submission updated in place).

        Raises:
            AssignmentNotFoundError: Unknown assignment.
            TransitionNotAllowedError: Status does not accept a submission,
                including losing a race to a concurrent writer.
            AuthorizationError: Caller is not the assignee.
            ValidationError: Empty remarks or artifact reference.
            InternalFailureError: Unexpected store failure.
        """
        log = self._log_operation(
            "submit_work",
            actor_id=str(actor.id),
            assignment_id=str(assignment_id),
        )
        with internal_failure_guard("submit_work", log):
            current = await self._load(assignment_id)
            new_status = next_status(
                current.status,
                LifecycleEvent.SUBMIT,
                LifecycleOperation.SUBMIT,
                assignment_id=assignment_id,
            )
            if actor.id != current.assignee_id:
                raise AuthorizationError(
                    actor_id=actor.id,
                    operation="submit",
                    reason="only the assignee may submit work",
                )
            remarks = _require_text("remarks", remarks)
            artifact_ref = _require_text("artifact_ref", artifact_ref)

            submission_id = uuid4()
            if submission_write_mode(current.status) is SubmissionWriteMode.REPLACE:
                existing = await self._repository.get_submission(assignment_id)
                if existing is not None:
                    submission_id = existing.id

            now_utc = self._time.utcnow()
            submission = Submission(
                id=submission_id,
                assignment_id=assignment_id,
                submitted_at=now_utc,
                remarks=remarks,
                artifact_ref=artifact_ref,
            )
            try:
                updated = await self._repository.record_submission(
                    assignment_id=assignment_id,
                    expected_status=current.status,
                    new_status=new_status,
                    submission=submission,
                    updated_at=now_utc,
                )
            except ConcurrentModificationError as e:
                log.warning(
                    "submission_lost_race",
                    expected_status=e.expected_status.value,
                    actual_status=e.actual_status.value,
                )
                raise TransitionNotAllowedError(
                    current_status=e.actual_status,
                    operation=LifecycleOperation.SUBMIT,
                    assignment_id=assignment_id,
                ) from e

        log.info(
            "work_submitted",
            from_status=current.status.value,
            to_status=updated.status.value,
            submission_id=str(submission_id),
        )
        return updated

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    async def review_submission(
        self,
        actor: Member,
        assignment_id: UUID,
        decision: ReviewDecision | str,
        remarks_by_admin: str,
    ) -> Assignment:
        """Approve or reject a submitted assignment.

        Args:
            actor: Calling member; must be a supervisor.
            assignment_id: Assignment under review.
            decision: ``APPROVED`` or ``REJECTED`` (exact match).
            remarks_by_admin: Supervisor remarks stored on the assignment.

        Raises:
            AssignmentNotFoundError: Unknown assignment.
            TransitionNotAllowedError: Status is not awaiting review.
            AuthorizationError: Caller is not a supervisor.
            ValidationError: Unknown decision or empty remarks.
            InternalFailureError: Unexpected store failure.
        """
        log = self._log_operation(
            "review_submission",
            actor_id=str(actor.id),
            assignment_id=str(assignment_id),
        )
        with internal_failure_guard("review_submission", log):
            current = await self._load(assignment_id)
            if current.status not in REVIEWABLE_STATUSES:
                raise TransitionNotAllowedError(
                    current_status=current.status,
                    operation=LifecycleOperation.REVIEW,
                    assignment_id=assignment_id,
                )
            self._require_role(actor, Role.SUPERVISOR, LifecycleOperation.REVIEW)
            parsed = _parse_decision(decision)
            remarks_by_admin = _require_text("remarks_by_admin", remarks_by_admin)

            new_status = next_status(
                current.status,
                parsed.event,
                LifecycleOperation.REVIEW,
                assignment_id=assignment_id,
            )
            try:
                updated = await self._repository.record_review(
                    assignment_id=assignment_id,
                    expected_status=current.status,
                    new_status=new_status,
                    remarks_by_admin=remarks_by_admin,
                    updated_at=self._time.utcnow(),
                )
            except ConcurrentModificationError as e:
                log.warning(
                    "review_lost_race",
                    expected_status=e.expected_status.value,
                    actual_status=e.actual_status.value,
                )
                raise TransitionNotAllowedError(
                    current_status=e.actual_status,
                    operation=LifecycleOperation.REVIEW,
                    assignment_id=assignment_id,
                ) from e

        log.info(
            "submission_reviewed",
            decision=parsed.value,
            from_status=current.status.value,
            to_status=updated.status.value,
        )
        return updated
