"""
PostBoard Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions, each carrying the HTTP status it maps to.
How:   Each exception class carries a message and optional context dict.
       Resource handlers convert the 4xx ones into responses locally; the
       Error Boundary renders whatever reaches it with the uniform envelope.

Exception Hierarchy:
    PostBoardError (base)          → 500
    ├── ValidationError            → 400 Bad Request (client can fix)
    ├── NotFoundError              → 404 Not Found
    ├── AuthError                  → 403 Forbidden / 401 Unauthorized
    ├── UpstreamError              → 500 (persistence or unexpected failure)
    └── PipelineError              → 500 (chain contract violated)
"""

from typing import Any, Dict, Optional


class PostBoardError(Exception):
    """
    Base exception for all PostBoard application errors.

    Attributes:
        message:      Human-readable error description
        context:      Additional debug info (logged, not returned to client)
        status_code:  HTTP status the Error Boundary answers with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostBoardError):
    """
    Raised when client input fails validation.

    When:    Required attribute missing or empty on create, malformed JSON body.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PostBoardError):
    """
    Raised when a requested resource does not exist.

    Stores return None for missing records and handlers answer 404 directly,
    so no built-in stage raises this. It fixes the 404 entry of the Error
    Boundary's status mapping for stages that transfer a not-found error
    with Fail(NotFoundError(...)) instead of responding themselves.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class AuthError(PostBoardError):
    """
    A bad or missing credential, for stages that transfer it with Fail().

    HTTP:    403 for a wrong token, 401 for wrong login credentials.

    AuthGate and the demo login answer 403/401 themselves with a {message}
    body, so neither raises this; it defines the Error Boundary's mapping.
    """

    status_code = 403

    def __init__(
        self,
        message: str = "Forbidden: Invalid token",
        status_code: int = 403,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.status_code = status_code


class UpstreamError(PostBoardError):
    """
    Raised when the persistence layer fails.

    The message is the driver's own text; the Error Boundary decides whether
    to expose it (EXPOSE_ERROR_DETAILS).
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A storage error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PipelineError(PostBoardError):
    """
    Raised when the middleware chain contract is broken.

    When:    A chain finishes without any stage producing a response, or a
             router is mounted after the Error Boundary was registered.
    """

    status_code = 500
