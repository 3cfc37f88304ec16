"""
jobly.errors

Application error taxonomy.

Responsibilities:
- Define exceptions that carry an HTTP status for the boundary layer.
- Keep the mapping to wire responses in one place (`api.app`).
"""

from __future__ import annotations


class JoblyError(Exception):
    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(JoblyError):
    status_code = 400
    default_message = "Bad Request"


class ContractViolationError(BadRequestError):
    """Caller handed the query builder input it cannot turn into SQL."""

    default_message = "No data"


class UnauthorizedError(JoblyError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(JoblyError):
    status_code = 404
    default_message = "Not Found"


# --- Module Notes -----------------------------------------------------------
# Token verification failures are not part of this hierarchy: the gate turns
# them into an anonymous request instead of an error response.
