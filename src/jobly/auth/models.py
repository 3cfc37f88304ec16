"""
jobly.auth.models

Auth domain models.

Responsibilities:
- Define the identity claims embedded in tokens.
- Define the per-request authentication result (`Anonymous | Authenticated`).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IdentityClaims:
    """
    Claims carried by a bearer token. Both fields are always present.
    """

    username: str
    is_admin: bool


@dataclass(frozen=True, slots=True)
class Anonymous:
    pass


@dataclass(frozen=True, slots=True)
class Authenticated:
    claims: IdentityClaims


AuthResult = Anonymous | Authenticated

ANONYMOUS = Anonymous()


# --- Module Notes -----------------------------------------------------------
# Guards pattern-match on `AuthResult`; the gate never raises to signal a bad token.
