"""
jobly.services.account_service

Registration, login, and profile updates for user accounts.

Responsibilities:
- Hash passwords before they reach storage (off the event loop).
- Authenticate credentials without revealing which part was wrong.
- Issue bearer tokens for authenticated users.
"""

from __future__ import annotations

import asyncio
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from jobly.auth.models import IdentityClaims
from jobly.auth.passwords import PasswordHasher
from jobly.auth.tokens import TokenCodec
from jobly.db.models import User
from jobly.db.repositories.users import UserRepo
from jobly.errors import UnauthorizedError
from jobly.observability.logging import get_logger

log = get_logger(__name__)


class AccountService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        hasher: PasswordHasher,
        codec: TokenCodec,
    ) -> None:
        self._session = session
        self._users = UserRepo(session)
        self._hasher = hasher
        self._codec = codec

    async def register(
        self,
        *,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        email: str,
    ) -> User:
        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        user = await self._users.create(
            username=username,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            email=email,
        )
        await self._session.commit()
        log.info("account.registered", username=username)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        user = await self._users.find(username)
        valid = await asyncio.to_thread(self._check_password, user, password)
        if user is None or not valid:
            # Same error for unknown user and wrong password.
            raise UnauthorizedError("Invalid username/password")
        return user

    def _check_password(self, user: User | None, password: str) -> bool:
        # Runs off the event loop; an unknown user still pays for one full verify.
        digest = user.password if user is not None else self._hasher.decoy_digest
        return self._hasher.verify(password, digest)

    async def login(self, username: str, password: str) -> str:
        user = await self.authenticate(username, password)
        log.info("account.login", username=username)
        return self._codec.issue(IdentityClaims(username=user.username, is_admin=user.is_admin))

    async def update(self, username: str, data: dict[str, Any]) -> User:
        if "password" in data:
            data = {**data, "password": await asyncio.to_thread(self._hasher.hash, data["password"])}
        user = await self._users.update(username, data)
        await self._session.commit()
        return user
