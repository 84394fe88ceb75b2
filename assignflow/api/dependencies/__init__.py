"""API dependencies for dependency injection."""

from assignflow.api.dependencies.assignments import (
    get_current_member,
    get_deadline_sweeper,
    get_lifecycle_service,
    get_member_directory,
    get_query_service,
    reset_assignment_api_dependencies,
)

__all__: list[str] = [
    "get_current_member",
    "get_deadline_sweeper",
    "get_lifecycle_service",
    "get_member_directory",
    "get_query_service",
    "reset_assignment_api_dependencies",
]
