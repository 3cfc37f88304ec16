"""
jobly.api.routers.jobs

Job posting endpoints. Reads are open; writes require an admin token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from jobly.api.deps import db_session
from jobly.api.schemas import JobCreate, JobEnvelope, JobOut, JobsEnvelope, JobUpdate
from jobly.auth.guards import ensure_admin
from jobly.db.repositories.jobs import JobRepo

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=JobsEnvelope)
async def list_jobs(
    title: str | None = None,
    min_salary: int | None = Query(default=None, alias="minSalary", ge=0),
    has_equity: bool | None = Query(default=None, alias="hasEquity"),
    session: AsyncSession = Depends(db_session),
) -> JobsEnvelope:
    jobs = await JobRepo(session).find_all(
        title=title, min_salary=min_salary, has_equity=has_equity
    )
    return JobsEnvelope(jobs=[JobOut.model_validate(j) for j in jobs])


@router.get("/{job_id}", response_model=JobEnvelope)
async def get_job(job_id: int, session: AsyncSession = Depends(db_session)) -> JobEnvelope:
    job = await JobRepo(session).get(job_id)
    return JobEnvelope(job=JobOut.model_validate(job))


@router.post(
    "",
    response_model=JobEnvelope,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(ensure_admin)],
)
async def create_job(
    body: JobCreate,
    session: AsyncSession = Depends(db_session),
) -> JobEnvelope:
    job = await JobRepo(session).create(
        title=body.title,
        company_handle=body.company_handle,
        salary=body.salary,
        equity=body.equity,
    )
    await session.commit()
    return JobEnvelope(job=JobOut.model_validate(job))


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(ensure_admin)])
async def update_job(
    job_id: int,
    body: JobUpdate,
    session: AsyncSession = Depends(db_session),
) -> JobEnvelope:
    job = await JobRepo(session).update(job_id, body.field_map())
    await session.commit()
    return JobEnvelope(job=JobOut.model_validate(job))


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
async def delete_job(job_id: int, session: AsyncSession = Depends(db_session)) -> dict[str, int]:
    await JobRepo(session).remove(job_id)
    await session.commit()
    return {"deleted": job_id}
