"""
jobly.api.routers.users

User account endpoints.

Responsibilities:
- Open registration.
- Admin-only listing; self-or-admin read/update/delete and job applications.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from jobly.api.deps import account_service, db_session
from jobly.api.schemas import (
    UserDetail,
    UserDetailEnvelope,
    UserEnvelope,
    UserOut,
    UserRegister,
    UsersEnvelope,
    UserUpdate,
)
from jobly.auth.guards import ensure_admin, ensure_correct_user_or_admin
from jobly.db.repositories.users import UserRepo
from jobly.services.account_service import AccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserEnvelope, status_code=HTTP_201_CREATED)
async def register_user(
    body: UserRegister,
    accounts: AccountService = Depends(account_service),
) -> UserEnvelope:
    user = await accounts.register(
        username=body.username,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
    )
    return UserEnvelope(user=UserOut.model_validate(user))


@router.get("", response_model=UsersEnvelope, dependencies=[Depends(ensure_admin)])
async def list_users(session: AsyncSession = Depends(db_session)) -> UsersEnvelope:
    users = await UserRepo(session).list_all()
    return UsersEnvelope(users=[UserOut.model_validate(u) for u in users])


@router.get(
    "/{username}",
    response_model=UserDetailEnvelope,
    dependencies=[Depends(ensure_correct_user_or_admin)],
)
async def get_user(
    username: str,
    session: AsyncSession = Depends(db_session),
) -> UserDetailEnvelope:
    user = await UserRepo(session).get(username)
    detail = UserDetail(
        **UserOut.model_validate(user).model_dump(),
        jobs=sorted(a.job_id for a in user.applications),
    )
    return UserDetailEnvelope(user=detail)


@router.patch(
    "/{username}",
    response_model=UserEnvelope,
    dependencies=[Depends(ensure_correct_user_or_admin)],
)
async def update_user(
    username: str,
    body: UserUpdate,
    accounts: AccountService = Depends(account_service),
) -> UserEnvelope:
    user = await accounts.update(username, body.field_map())
    return UserEnvelope(user=UserOut.model_validate(user))


@router.delete("/{username}", dependencies=[Depends(ensure_correct_user_or_admin)])
async def delete_user(
    username: str,
    session: AsyncSession = Depends(db_session),
) -> dict[str, str]:
    await UserRepo(session).remove(username)
    await session.commit()
    return {"deleted": username}


@router.post(
    "/{username}/jobs/{job_id}",
    dependencies=[Depends(ensure_correct_user_or_admin)],
)
async def apply_to_job(
    username: str,
    job_id: int,
    session: AsyncSession = Depends(db_session),
) -> dict[str, int]:
    await UserRepo(session).apply_to_job(username, job_id)
    await session.commit()
    return {"applied": job_id}
