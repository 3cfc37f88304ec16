"""
jobly.auth.tokens

Signed claims tokens (JWT, HMAC).

Responsibilities:
- Issue a compact signed token for a set of identity claims.
- Verify a token and return fully-populated claims, or fail.

Note:
- Tokens carry no expiry unless the codec is built with a `ttl`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from jobly.auth.models import IdentityClaims


class TokenError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class TokenCodec:
    secret: str = field(repr=False)
    alg: str = "HS256"
    ttl: timedelta | None = None

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("token signing secret must not be empty")

    def issue(self, claims: IdentityClaims) -> str:
        now = datetime.now(tz=UTC)
        payload: dict[str, Any] = {
            "username": claims.username,
            "isAdmin": claims.is_admin,
            "iat": int(now.timestamp()),
        }
        if self.ttl is not None:
            payload["exp"] = int((now + self.ttl).timestamp())
        return jwt.encode(payload, self.secret, algorithm=self.alg)

    def verify(self, token: str) -> IdentityClaims:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.alg],
                options={"require": ["exp"] if self.ttl is not None else []},
            )
        except InvalidTokenError as e:
            raise TokenError(str(e)) from e

        username = payload.get("username")
        is_admin = payload.get("isAdmin")
        if not isinstance(username, str) or not username or not isinstance(is_admin, bool):
            raise TokenError("token claims are incomplete")
        return IdentityClaims(username=username, is_admin=is_admin)


# --- Module Notes -----------------------------------------------------------
# One codec is built per app in `api.app.create_app`; tests build their own with
# distinct secrets.
