"""
PostBoard Backend: Error Boundary
=================================

What:  The single terminal stage that turns any failure into the uniform
       envelope {message, error, request_id}.
Who:   Application.dispatch() for Fail outcomes, and the FastAPI catch-all
       exception handler for errors raised outside the pipeline.

Status mapping:
    PostBoardError subclasses  → their status_code (400/403/404/500)
    anything else              → 500

Each call logs exactly once: ERROR with traceback for 5xx, WARNING for 4xx.
With expose_details=False, 5xx envelopes carry a generic error string
instead of the raw exception text.
"""

import logging
from typing import Optional

from postboard.exceptions import PostBoardError
from postboard.pipeline.context import RequestContext, Respond
from postboard.schemas import ErrorResponse

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Something went wrong!"
REDACTED_ERROR = "Internal server error"


class ErrorBoundary:
    def __init__(self, expose_details: bool = True):
        self.expose_details = expose_details

    @staticmethod
    def status_for(error: BaseException) -> int:
        if isinstance(error, PostBoardError):
            return error.status_code
        return 500

    def render(self, error: BaseException, ctx: Optional[RequestContext] = None) -> Respond:
        status = self.status_for(error)
        rid = ctx.state.get("request_id", "") if ctx is not None else ""
        where = f"{ctx.method} {ctx.path}" if ctx is not None else "<no request>"

        if status >= 500:
            logger.error(
                "[%s] %s failed: %s",
                rid,
                where,
                str(error),
                exc_info=(type(error), error, error.__traceback__),
            )
        else:
            logger.warning("[%s] %s rejected (%d): %s", rid, where, status, str(error))

        detail = str(error)
        if status >= 500 and not self.expose_details:
            detail = REDACTED_ERROR

        return Respond(
            status_code=status,
            content=ErrorResponse(
                message=FAILURE_MESSAGE,
                error=detail,
                request_id=rid,
            ).model_dump(),
        )
