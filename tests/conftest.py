"""
tests.conftest

Shared fixtures: an app built for `env="test"` on a throwaway SQLite file,
an httpx client bound to it, and helpers for minting tokens and seeding rows.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from jobly.api.app import create_app
from jobly.auth.models import IdentityClaims
from jobly.db.models import Company, Job, User
from jobly.settings import Settings

TEST_SECRET = "test-secret-0123456789abcdef0123456789"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'jobly.db'}",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx's ASGITransport does not run lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def _bearer(app: FastAPI, username: str, *, is_admin: bool = False) -> dict[str, str]:
    token = app.state.token_codec.issue(IdentityClaims(username=username, is_admin=is_admin))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(app: FastAPI) -> dict[str, str]:
    return _bearer(app, "admin", is_admin=True)


@pytest.fixture
def alice_headers(app: FastAPI) -> dict[str, str]:
    return _bearer(app, "alice")


@pytest.fixture
def bob_headers(app: FastAPI) -> dict[str, str]:
    return _bearer(app, "bob")


@pytest_asyncio.fixture
async def seeded(app: FastAPI) -> dict[str, int]:
    """
    Two companies, three jobs, and users alice/bob (password "password1").
    Returns job ids by title.
    """
    hasher = app.state.password_hasher
    async with app.state.sessionmaker() as session:
        for username in ("alice", "bob"):
            session.add(
                User(
                    username=username,
                    password=hasher.hash("password1"),
                    first_name=username.title(),
                    last_name="Tester",
                    email=f"{username}@example.com",
                    is_admin=False,
                )
            )
        session.add_all(
            [
                Company(handle="c1", name="C1", description="Desc1", num_employees=1),
                Company(handle="c2", name="C2", description="Desc2", num_employees=200),
            ]
        )
        await session.flush()
        jobs = [
            Job(title="Engineer", salary=100_000, equity=0.1, company_handle="c1"),
            Job(title="Designer", salary=80_000, equity=0.0, company_handle="c1"),
            Job(title="Manager", salary=None, equity=None, company_handle="c2"),
        ]
        session.add_all(jobs)
        await session.commit()
        return {j.title: j.id for j in jobs}
