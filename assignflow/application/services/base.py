"""Shared logging plumbing for application services.

    class AssignmentQueryService(LoggingMixin):
        def __init__(self, repository: AssignmentRepositoryProtocol) -> None:
            self._repository = repository
            self._init_logger(component="query")

        async def get_assignment(self, assignment_id: UUID) -> Assignment:
            log = self._log_operation("get_assignment", assignment_id=str(assignment_id))
            log.debug("assignment_lookup")
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from assignflow.domain.errors.internal import InternalFailureError
from assignflow.domain.exceptions import AssignflowError
from assignflow.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Gives a service a structlog logger bound to its class and component.

    ``_log_operation`` narrows that logger to one call, adding the
    operation name and whatever correlation id is active at the time.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "lifecycle") -> None:
        self._log = structlog.get_logger().bind(
            service=type(self).__name__,
            component=component,
        )

    def _log_operation(self, operation: str, **context: object) -> structlog.BoundLogger:
        """Logger for a single operation, tagged with the current correlation id."""
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )


@contextmanager
def internal_failure_guard(operation: str, log: structlog.BoundLogger) -> Iterator[None]:
    """Re-raise domain errors untouched; turn anything else into InternalFailureError.

    The unexpected exception is logged with its traceback and kept as
    ``__cause__`` of the raised error.

        with internal_failure_guard("submit_work", log):
            await self._repository.record_submission(...)
    """
    try:
        yield
    except AssignflowError:
        raise
    except Exception as exc:
        log.exception("operation_failed", error=str(exc), error_type=type(exc).__name__)
        raise InternalFailureError(operation) from exc
