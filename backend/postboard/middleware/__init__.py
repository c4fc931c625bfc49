"""
PostBoard Backend: HTTP Middleware
==================================

Transport-level concerns, wrapped around every request before FastAPI
routing (distinct from the per-route pipeline stages in postboard.pipeline):

    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → route

Request ID runs first so the access log line and every pipeline log line
for the request carry the same correlation ID.
"""

from postboard.middleware.logging import RequestLoggingMiddleware
from postboard.middleware.request_id import RequestIDMiddleware, request_id_var

__all__ = ["RequestIDMiddleware", "RequestLoggingMiddleware", "request_id_var"]
