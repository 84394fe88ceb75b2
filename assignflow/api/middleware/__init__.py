"""HTTP middleware."""

from assignflow.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
