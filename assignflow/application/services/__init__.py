"""Application services for assignflow."""

from assignflow.application.services.assignment_lifecycle_service import (
    AssignmentLifecycleService,
)
from assignflow.application.services.assignment_query_service import (
    AssignmentQueryService,
)
from assignflow.application.services.deadline_sweeper import DeadlineSweeper
from assignflow.application.services.system_time_authority import (
    SystemTimeAuthority,
)

__all__ = [
    "AssignmentLifecycleService",
    "AssignmentQueryService",
    "DeadlineSweeper",
    "SystemTimeAuthority",
]
