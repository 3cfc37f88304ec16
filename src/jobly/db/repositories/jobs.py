from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobly.db.models import Company, Job
from jobly.db.repositories.base import apply_partial_update
from jobly.db.sql import escape_like, sql_for_partial_update
from jobly.errors import BadRequestError, NotFoundError

UPDATABLE_FIELDS = frozenset({"title", "salary", "equity"})
JS_TO_SQL: dict[str, str] = {}


class JobRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        title: str,
        company_handle: str,
        salary: int | None = None,
        equity: float | None = None,
    ) -> Job:
        if await self._session.get(Company, company_handle) is None:
            raise BadRequestError(f"No company: {company_handle}")
        job = Job(title=title, salary=salary, equity=equity, company_handle=company_handle)
        self._session.add(job)
        await self._session.flush()
        return job

    async def find_all(
        self,
        *,
        title: str | None = None,
        min_salary: int | None = None,
        has_equity: bool | None = None,
    ) -> list[Job]:
        stmt = select(Job).order_by(Job.title, Job.id)
        if title:
            stmt = stmt.where(Job.title.ilike(f"%{escape_like(title)}%", escape="\\"))
        if min_salary is not None:
            stmt = stmt.where(Job.salary >= min_salary)
        if has_equity:
            stmt = stmt.where(Job.equity > 0)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, job_id: int) -> Job:
        stmt = select(Job).where(Job.id == job_id).execution_options(populate_existing=True)
        job = (await self._session.execute(stmt)).scalar_one_or_none()
        if job is None:
            raise NotFoundError(f"No job: {job_id}")
        return job

    async def update(self, job_id: int, data: dict[str, Any]) -> Job:
        update = sql_for_partial_update(data, JS_TO_SQL, allowed=UPDATABLE_FIELDS)
        matched = await apply_partial_update(
            self._session, table="jobs", update=update, key_column="id", key=job_id
        )
        if not matched:
            raise NotFoundError(f"No job: {job_id}")
        return await self.get(job_id)

    async def remove(self, job_id: int) -> None:
        job = await self.get(job_id)
        await self._session.delete(job)
        await self._session.flush()
