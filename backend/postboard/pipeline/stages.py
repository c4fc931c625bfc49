"""
PostBoard Backend: Middleware Stages
====================================

Stages that run before a resource handler:

    RequestTimestamp  annotates ctx.state["received_at"]; never short-circuits
    ParamLogger       logs path and query params at DEBUG; never short-circuits
    AuthGate          exact match of a header against a shared secret,
                      403 short-circuit otherwise

All three are stateless apart from their configuration.
"""

import logging
from datetime import datetime, timezone
from typing import Callable

from postboard.pipeline.chain import Stage
from postboard.pipeline.context import CONTINUE, Outcome, RequestContext, Respond

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGE = "Forbidden: Invalid token"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RequestTimestamp(Stage):
    """Records the ISO-8601 UTC time the request reached the chain."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    async def process(self, ctx: RequestContext) -> Outcome:
        ctx.state["received_at"] = self._clock().isoformat()
        return CONTINUE


class ParamLogger(Stage):
    async def process(self, ctx: RequestContext) -> Outcome:
        logger.debug("Path params: %s", ctx.params)
        logger.debug("Query params: %s", ctx.query)
        return CONTINUE


class AuthGate(Stage):
    """
    Static shared-secret check.

    The header value must equal the token exactly: no "Bearer " prefix
    handling, no trimming. An absent header is a mismatch.
    """

    def __init__(self, token: str, header: str = "authorization"):
        if not token:
            raise ValueError("AuthGate needs a non-empty token")
        self._token = token
        self.header = header

    async def process(self, ctx: RequestContext) -> Outcome:
        if ctx.header(self.header) == self._token:
            return CONTINUE
        logger.warning(
            "[%s] Rejected %s %s: bad or missing %s header",
            ctx.state.get("request_id", ""),
            ctx.method,
            ctx.path,
            self.header,
        )
        return Respond(status_code=403, content={"message": FORBIDDEN_MESSAGE})
