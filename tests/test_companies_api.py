from __future__ import annotations

import pytest

NEW_COMPANY = {
    "handle": "new",
    "name": "New Co",
    "description": "Brand new",
    "numEmployees": 10,
    "logoUrl": "http://new.img",
}


@pytest.mark.asyncio
async def test_list_companies_is_open(client, seeded) -> None:
    r = await client.get("/companies")
    assert r.status_code == 200
    assert [c["handle"] for c in r.json()["companies"]] == ["c1", "c2"]
    assert r.json()["companies"][0] == {
        "handle": "c1",
        "name": "C1",
        "description": "Desc1",
        "numEmployees": 1,
        "logoUrl": None,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("params", "expected"),
    [
        ({"nameLike": "1"}, ["c1"]),
        ({"minEmployees": 100}, ["c2"]),
        ({"maxEmployees": 100}, ["c1"]),
        ({"minEmployees": 1, "maxEmployees": 200}, ["c1", "c2"]),
    ],
)
async def test_filter_companies(client, seeded, params, expected) -> None:
    r = await client.get("/companies", params=params)
    assert [c["handle"] for c in r.json()["companies"]] == expected


@pytest.mark.asyncio
async def test_min_greater_than_max_is_bad_request(client, seeded) -> None:
    r = await client.get("/companies", params={"minEmployees": 10, "maxEmployees": 1})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_get_company_includes_jobs(client, seeded) -> None:
    r = await client.get("/companies/c1")
    assert r.status_code == 200
    titles = [j["title"] for j in r.json()["company"]["jobs"]]
    assert titles == ["Engineer", "Designer"]
    assert (await client.get("/companies/nope")).status_code == 404


@pytest.mark.asyncio
async def test_create_company_admin_only(client, seeded, admin_headers, alice_headers) -> None:
    assert (await client.post("/companies", json=NEW_COMPANY)).status_code == 401
    r = await client.post("/companies", json=NEW_COMPANY, headers=alice_headers)
    assert r.status_code == 401
    assert r.json() == {"error": {"message": "Unauthorized", "status": 401}}

    r = await client.post("/companies", json=NEW_COMPANY, headers=admin_headers)
    assert r.status_code == 201
    assert r.json() == {"company": NEW_COMPANY}

    r = await client.post("/companies", json=NEW_COMPANY, headers=admin_headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_update_company_uses_aliased_columns(client, seeded, admin_headers) -> None:
    r = await client.patch(
        "/companies/c1",
        json={"numEmployees": 42, "logoUrl": "http://c1.img"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["company"]["numEmployees"] == 42
    assert r.json()["company"]["logoUrl"] == "http://c1.img"
    assert r.json()["company"]["name"] == "C1"


@pytest.mark.asyncio
async def test_update_company_rejections(client, seeded, admin_headers, alice_headers) -> None:
    r = await client.patch("/companies/c1", json={"name": "X"}, headers=alice_headers)
    assert r.status_code == 401
    r = await client.patch("/companies/c1", json={"handle": "c9"}, headers=admin_headers)
    assert r.status_code == 400
    r = await client.patch("/companies/c1", json={}, headers=admin_headers)
    assert r.status_code == 400
    r = await client.patch("/companies/nope", json={"name": "X"}, headers=admin_headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_company_removes_its_jobs(client, seeded, admin_headers) -> None:
    r = await client.delete("/companies/c1", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"deleted": "c1"}

    r = await client.get("/jobs")
    assert [j["companyHandle"] for j in r.json()["jobs"]] == ["c2"]
    assert (await client.delete("/companies/c1", headers=admin_headers)).status_code == 404


@pytest.mark.asyncio
async def test_duplicate_company_name_is_bad_request(client, seeded, admin_headers) -> None:
    r = await client.post(
        "/companies", json={"handle": "c9", "name": "C1"}, headers=admin_headers
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Duplicate company name: C1"

    r = await client.patch("/companies/c2", json={"name": "C1"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Duplicate company name: C1"

    r = await client.get("/companies/c2")
    assert r.json()["company"]["name"] == "C2"


@pytest.mark.asyncio
async def test_null_clears_nullable_column(client, seeded, admin_headers) -> None:
    await client.patch("/companies/c1", json={"logoUrl": "http://x"}, headers=admin_headers)

    r = await client.patch("/companies/c1", json={"logoUrl": None}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["company"]["logoUrl"] is None

    r = await client.patch(
        "/companies/c1", json={"numEmployees": None, "name": "C1b"}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json()["company"]["numEmployees"] is None
    assert r.json()["company"]["name"] == "C1b"


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["name", "description"])
async def test_null_for_required_column_is_bad_request(
    client, seeded, admin_headers, field
) -> None:
    r = await client.patch("/companies/c1", json={field: None}, headers=admin_headers)
    assert r.status_code == 400
    assert "may not be null" in r.json()["error"]["message"]


@pytest.mark.asyncio
async def test_name_filter_treats_wildcards_literally(client, seeded, admin_headers) -> None:
    await client.post(
        "/companies", json={"handle": "pct", "name": "100% Co"}, headers=admin_headers
    )
    r = await client.get("/companies", params={"nameLike": "%"})
    assert [c["handle"] for c in r.json()["companies"]] == ["pct"]

    r = await client.get("/companies", params={"nameLike": "C_"})
    assert r.json()["companies"] == []
