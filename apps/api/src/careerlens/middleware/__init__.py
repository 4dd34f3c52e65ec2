"""HTTP middleware."""

from careerlens.middleware.request_log import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
