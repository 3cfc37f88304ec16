"""
jobly.auth.guards

Authorization guards.

Responsibilities:
- Pure decision functions over an `AuthResult`.
- FastAPI dependencies that enforce them and raise `UnauthorizedError`.
"""

from __future__ import annotations

from fastapi import Depends, Request

from jobly.auth.models import Authenticated, AuthResult, IdentityClaims
from jobly.errors import UnauthorizedError


def is_admin(auth: AuthResult) -> bool:
    match auth:
        case Authenticated(claims=IdentityClaims(is_admin=True)):
            return True
        case _:
            return False


def is_self_or_admin(auth: AuthResult, owner: str) -> bool:
    match auth:
        case Authenticated(claims=claims):
            return claims.is_admin or claims.username == owner
        case _:
            return False


def current_auth(request: Request) -> AuthResult:
    # Guards depend on the gate having run; a missing result is a wiring bug.
    auth = getattr(request.state, "auth", None)
    if auth is None:
        raise RuntimeError("BearerTokenGate did not run before an authorization guard")
    return auth


def ensure_admin(auth: AuthResult = Depends(current_auth)) -> IdentityClaims:
    if not is_admin(auth):
        raise UnauthorizedError()
    return auth.claims


def ensure_correct_user_or_admin(
    username: str,
    auth: AuthResult = Depends(current_auth),
) -> IdentityClaims:
    # `username` is the path parameter naming the resource owner.
    if not is_self_or_admin(auth, username):
        raise UnauthorizedError()
    return auth.claims
