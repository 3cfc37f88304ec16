"""
jobly.db.repositories.companies

Repository for `Company` entities.

Responsibilities:
- Create, filter, fetch, partially update, and delete companies.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobly.db.models import Company
from jobly.db.repositories.base import apply_partial_update
from jobly.db.sql import escape_like, sql_for_partial_update
from jobly.errors import BadRequestError, NotFoundError

UPDATABLE_FIELDS = frozenset({"name", "description", "numEmployees", "logoUrl"})
JS_TO_SQL = {"numEmployees": "num_employees", "logoUrl": "logo_url"}


class CompanyRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        handle: str,
        name: str,
        description: str = "",
        num_employees: int | None = None,
        logo_url: str | None = None,
    ) -> Company:
        if await self._session.get(Company, handle) is not None:
            raise BadRequestError(f"Duplicate company: {handle}")
        company = Company(
            handle=handle,
            name=name,
            description=description,
            num_employees=num_employees,
            logo_url=logo_url,
        )
        self._session.add(company)
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            raise BadRequestError(f"Duplicate company name: {name}") from e
        return company

    async def find_all(
        self,
        *,
        name_like: str | None = None,
        min_employees: int | None = None,
        max_employees: int | None = None,
    ) -> list[Company]:
        if (
            min_employees is not None
            and max_employees is not None
            and min_employees > max_employees
        ):
            raise BadRequestError("Min employees cannot be greater than max")

        stmt = select(Company).order_by(Company.name)
        if name_like:
            stmt = stmt.where(Company.name.ilike(f"%{escape_like(name_like)}%", escape="\\"))
        if min_employees is not None:
            stmt = stmt.where(Company.num_employees >= min_employees)
        if max_employees is not None:
            stmt = stmt.where(Company.num_employees <= max_employees)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, handle: str) -> Company:
        stmt = (
            select(Company)
            .where(Company.handle == handle)
            .options(selectinload(Company.jobs))
            .execution_options(populate_existing=True)
        )
        company = (await self._session.execute(stmt)).scalar_one_or_none()
        if company is None:
            raise NotFoundError(f"No company: {handle}")
        return company

    async def update(self, handle: str, data: dict[str, Any]) -> Company:
        update = sql_for_partial_update(data, JS_TO_SQL, allowed=UPDATABLE_FIELDS)
        try:
            matched = await apply_partial_update(
                self._session, table="companies", update=update, key_column="handle", key=handle
            )
        except IntegrityError as e:
            # The only unique column a caller can change is `name`.
            await self._session.rollback()
            raise BadRequestError(f"Duplicate company name: {data.get('name')}") from e
        if not matched:
            raise NotFoundError(f"No company: {handle}")
        return await self.get(handle)

    async def remove(self, handle: str) -> None:
        company = await self.get(handle)
        await self._session.delete(company)
        await self._session.flush()
