"""
PostBoard Backend: Auth Demo Handlers
=====================================

What:  Terminal stages for the /test-routes prefix: a dummy login that hands
       out the shared secret, a route behind AuthGate and one without it.

There are no sessions, expiry or hashing: the login compares plain strings
and the "token" is the static AUTH_TOKEN itself.
"""

import hmac
import logging

import pydantic

from postboard.pipeline.context import Outcome, RequestContext, Respond
from postboard.schemas import LoginRequest, MessageResponse, TokenResponse

logger = logging.getLogger(__name__)

PROTECTED_MESSAGE = "You have accessed a protected route!"
PUBLIC_MESSAGE = "This is a normal route without authentication."
UNAUTHORIZED_MESSAGE = "Unauthorized: Invalid credentials"


class AuthDemoHandlers:
    def __init__(self, username: str, password: str, token: str):
        self._username = username
        self._password = password
        self._token = token

    def _credentials_match(self, login: LoginRequest) -> bool:
        if login.username is None or login.password is None:
            return False
        return hmac.compare_digest(
            login.username.encode(), self._username.encode()
        ) and hmac.compare_digest(login.password.encode(), self._password.encode())

    async def login(self, ctx: RequestContext) -> Outcome:
        try:
            login = LoginRequest.model_validate(ctx.body if isinstance(ctx.body, dict) else {})
        except pydantic.ValidationError:
            login = LoginRequest()

        if not self._credentials_match(login):
            logger.warning("Failed login for username=%r", login.username)
            return Respond(
                status_code=401,
                content=MessageResponse(message=UNAUTHORIZED_MESSAGE).model_dump(),
            )

        logger.info("Issued token to %s", login.username)
        return Respond(content=TokenResponse(token=self._token).model_dump())

    async def protected(self, ctx: RequestContext) -> Outcome:
        return Respond(content=MessageResponse(message=PROTECTED_MESSAGE).model_dump())

    async def public(self, ctx: RequestContext) -> Outcome:
        return Respond(content=MessageResponse(message=PUBLIC_MESSAGE).model_dump())
