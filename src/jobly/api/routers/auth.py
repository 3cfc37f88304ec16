"""
jobly.api.routers.auth

Token endpoint.

Responsibilities:
- Exchange a username/password for a signed bearer token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from jobly.api.deps import account_service
from jobly.api.schemas import TokenRequest, TokenResponse
from jobly.services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def get_token(
    body: TokenRequest,
    accounts: AccountService = Depends(account_service),
) -> TokenResponse:
    token = await accounts.login(body.username, body.password)
    return TokenResponse(token=token)
