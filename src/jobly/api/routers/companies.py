"""
jobly.api.routers.companies

Company endpoints. Reads are open; writes require an admin token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from jobly.api.deps import db_session
from jobly.api.schemas import (
    CompaniesEnvelope,
    CompanyCreate,
    CompanyDetail,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyOut,
    CompanyUpdate,
)
from jobly.auth.guards import ensure_admin
from jobly.db.repositories.companies import CompanyRepo

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=CompaniesEnvelope)
async def list_companies(
    name_like: str | None = Query(default=None, alias="nameLike"),
    min_employees: int | None = Query(default=None, alias="minEmployees", ge=0),
    max_employees: int | None = Query(default=None, alias="maxEmployees", ge=0),
    session: AsyncSession = Depends(db_session),
) -> CompaniesEnvelope:
    companies = await CompanyRepo(session).find_all(
        name_like=name_like, min_employees=min_employees, max_employees=max_employees
    )
    return CompaniesEnvelope(companies=[CompanyOut.model_validate(c) for c in companies])


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
async def get_company(
    handle: str,
    session: AsyncSession = Depends(db_session),
) -> CompanyDetailEnvelope:
    company = await CompanyRepo(session).get(handle)
    return CompanyDetailEnvelope(company=CompanyDetail.model_validate(company))


@router.post(
    "",
    response_model=CompanyEnvelope,
    status_code=HTTP_201_CREATED,
    dependencies=[Depends(ensure_admin)],
)
async def create_company(
    body: CompanyCreate,
    session: AsyncSession = Depends(db_session),
) -> CompanyEnvelope:
    company = await CompanyRepo(session).create(
        handle=body.handle,
        name=body.name,
        description=body.description,
        num_employees=body.num_employees,
        logo_url=body.logo_url,
    )
    await session.commit()
    return CompanyEnvelope(company=CompanyOut.model_validate(company))


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(ensure_admin)])
async def update_company(
    handle: str,
    body: CompanyUpdate,
    session: AsyncSession = Depends(db_session),
) -> CompanyEnvelope:
    company = await CompanyRepo(session).update(handle, body.field_map())
    await session.commit()
    return CompanyEnvelope(company=CompanyOut.model_validate(company))


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
async def delete_company(
    handle: str,
    session: AsyncSession = Depends(db_session),
) -> dict[str, str]:
    await CompanyRepo(session).remove(handle)
    await session.commit()
    return {"deleted": handle}
