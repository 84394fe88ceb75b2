"""Correlation ids for request and sweep tracing.

The id lives in a ContextVar so it stays attached across await points.
LoggingMiddleware binds one per HTTP request; every deadline sweeper
tick opens its own ``correlation_scope``.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

_active_correlation_id: ContextVar[str] = ContextVar(
    "assignflow_correlation_id", default=""
)


def generate_correlation_id() -> str:
    return str(uuid4())


def get_correlation_id() -> str:
    """Active correlation id; empty outside any request or tick."""
    return _active_correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _active_correlation_id.set(correlation_id)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id for the block and restore the previous one after.

    Args:
        correlation_id: Id to bind; a fresh one is generated when omitted.

    Yields:
        The id bound inside the block.
    """
    bound = correlation_id or generate_correlation_id()
    token = _active_correlation_id.set(bound)
    try:
        yield bound
    finally:
        _active_correlation_id.reset(token)


def correlation_id_processor(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor stamping entries with the active correlation id.

    An id bound explicitly on the logger wins.
    """
    active = _active_correlation_id.get()
    if active and "correlation_id" not in event_dict:
        event_dict["correlation_id"] = active
    return event_dict
