"""
jobly.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide DB sessions, the password hasher, and the token codec.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobly.auth.passwords import PasswordHasher
from jobly.auth.tokens import TokenCodec
from jobly.services.account_service import AccountService


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the app lifespan (`jobly.api.app.create_app`).
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped session; handlers commit explicitly.
    async with session_factory() as session:
        yield session


def password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher  # type: ignore[attr-defined]


def token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec  # type: ignore[attr-defined]


def account_service(
    session: AsyncSession = Depends(db_session),
    hasher: PasswordHasher = Depends(password_hasher),
    codec: TokenCodec = Depends(token_codec),
) -> AccountService:
    return AccountService(session=session, hasher=hasher, codec=codec)
