"""
jobly.auth.gate

Best-effort bearer token authentication.

Responsibilities:
- Resolve the `Authorization` header of every request into an `AuthResult`.
- Attach the result to `request.state.auth` for downstream guards.

The gate never rejects a request. A missing, malformed, or invalid token
leaves the request anonymous; guards are the enforcement point.
"""

from __future__ import annotations

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from jobly.auth.models import ANONYMOUS, Authenticated, AuthResult
from jobly.auth.tokens import TokenCodec, TokenError
from jobly.observability.logging import get_logger

log = get_logger(__name__)


def authenticate(authorization: str | None, codec: TokenCodec) -> AuthResult:
    if not authorization:
        return ANONYMOUS

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        log.debug("auth.malformed_header")
        return ANONYMOUS

    try:
        claims = codec.verify(token)
    except TokenError as e:
        log.info("auth.token_rejected", reason=str(e))
        return ANONYMOUS
    return Authenticated(claims)


class BearerTokenGate(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, *, codec: TokenCodec) -> None:
        super().__init__(app)
        self._codec = codec

    async def dispatch(self, request: Request, call_next) -> Response:
        result = authenticate(request.headers.get("authorization"), self._codec)
        request.state.auth = result
        if isinstance(result, Authenticated):
            structlog.contextvars.bind_contextvars(username=result.claims.username)
        return await call_next(request)


# --- Module Notes -----------------------------------------------------------
# Registered inside `RequestContextMiddleware` so the bound username is cleared
# together with the rest of the request context.
