from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobly.db.models import Application, Job, User
from jobly.db.repositories.base import apply_partial_update
from jobly.db.sql import sql_for_partial_update
from jobly.errors import BadRequestError, NotFoundError

UPDATABLE_FIELDS = frozenset({"firstName", "lastName", "password", "email"})
JS_TO_SQL = {"firstName": "first_name", "lastName": "last_name"}


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        username: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        email: str,
        is_admin: bool = False,
    ) -> User:
        if await self._session.get(User, username) is not None:
            raise BadRequestError(f"Duplicate username: {username}")
        user = User(
            username=username,
            password=password_hash,
            first_name=first_name,
            last_name=last_name,
            email=email,
            is_admin=is_admin,
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same username.
            await self._session.rollback()
            raise BadRequestError(f"Duplicate username: {username}") from e
        return user

    async def find(self, username: str) -> User | None:
        stmt = (
            select(User)
            .where(User.username == username)
            .options(selectinload(User.applications))
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get(self, username: str) -> User:
        user = await self.find(username)
        if user is None:
            raise NotFoundError(f"No user: {username}")
        return user

    async def list_all(self) -> list[User]:
        stmt = select(User).order_by(User.username)
        return list((await self._session.execute(stmt)).scalars().all())

    async def update(self, username: str, data: dict[str, Any]) -> User:
        update = sql_for_partial_update(data, JS_TO_SQL, allowed=UPDATABLE_FIELDS)
        matched = await apply_partial_update(
            self._session, table="users", update=update, key_column="username", key=username
        )
        if not matched:
            raise NotFoundError(f"No user: {username}")
        return await self.get(username)

    async def remove(self, username: str) -> None:
        user = await self.get(username)
        await self._session.delete(user)
        await self._session.flush()

    async def apply_to_job(self, username: str, job_id: int) -> None:
        if await self._session.get(Job, job_id) is None:
            raise NotFoundError(f"No job: {job_id}")
        await self.get(username)
        if await self._session.get(Application, (username, job_id)) is not None:
            raise BadRequestError(f"Already applied to job: {job_id}")
        self._session.add(Application(username=username, job_id=job_id))
        await self._session.flush()
