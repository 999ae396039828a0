"""Profile Routes — GET /profiles/me provisions on first access.

Invariants:
    - Known domain -> profile created once, verified, at the matched college
    - Unknown domain -> 200 with profile=None (never a guessed college)
    - Unknown domain + signup college claim -> unverified profile at that college
    - Lookup failure -> 503 with Retry-After
    - No identity headers -> 401
"""

from uuid import uuid4

from campus_connect.core.errors import DatabaseError
from campus_connect.infrastructure.repositories import SqlInstitutionRepository

from tests.services.identity import identity_headers


async def test_first_access_creates_profile(client, colleges):
    headers = identity_headers(uuid4(), "sam@college.edu", "Sam Lee")
    res = await client.get("/api/v1/profiles/me", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["created"] is True
    assert body["affiliated"] is True
    assert body["profile"]["college_id"] == str(colleges["state"].id)
    assert body["profile"]["display_name"] == "Sam Lee"
    assert body["profile"]["is_verified"] is True
    assert body["resolution"]["status"] == "resolved"

    again = await client.get("/api/v1/profiles/me", headers=headers)
    assert again.json()["created"] is False
    assert again.json()["profile"]["id"] == body["profile"]["id"]


async def test_existing_profile_is_returned(client, student_headers, student):
    res = await client.get("/api/v1/profiles/me", headers=student_headers)
    body = res.json()
    assert body["profile"]["display_name"] == "Jane Doe"
    assert body["created"] is False
    assert body["resolution"] is None


async def test_unknown_domain_is_unaffiliated(client, colleges):
    headers = identity_headers(uuid4(), "sam@gmail.com")
    res = await client.get("/api/v1/profiles/me", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["profile"] is None
    assert body["affiliated"] is False
    assert body["resolution"]["status"] == "not_found"
    assert "manually" in body["resolution"]["message"]


async def test_lookup_failure_is_503_with_retry_after(client, colleges, monkeypatch):
    async def boom(self, domain):
        raise DatabaseError("Connection or operational error", "lookup")

    monkeypatch.setattr(SqlInstitutionRepository, "get_by_domain", boom)
    headers = identity_headers(uuid4(), "sam@college.edu")
    res = await client.get("/api/v1/profiles/me", headers=headers)
    assert res.status_code == 503
    assert res.headers["Retry-After"] == "1"
    assert res.json()["error"]["code"] == "AFFILIATION_LOOKUP_FAILED"


async def test_missing_headers_is_401(client):
    res = await client.get("/api/v1/profiles/me")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHENTICATED"


async def test_invalid_user_id_is_401(client):
    res = await client.get(
        "/api/v1/profiles/me",
        headers={"X-User-Id": "not-a-uuid", "X-User-Email": "a@college.edu"},
    )
    assert res.status_code == 401


async def test_signup_college_claim_affiliates_unknown_domain(client, colleges):
    state = colleges["state"]
    headers = identity_headers(uuid4(), "sam@gmail.com", college_id=state.id)
    res = await client.get("/api/v1/profiles/me", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["created"] is True
    assert body["affiliated"] is True
    assert body["profile"]["college_id"] == str(state.id)
    assert body["profile"]["is_verified"] is False
    assert body["resolution"]["status"] == "not_found"


async def test_invalid_college_claim_is_401(client):
    headers = identity_headers(uuid4(), "sam@gmail.com")
    headers["X-User-College-Id"] = "not-a-uuid"
    res = await client.get("/api/v1/profiles/me", headers=headers)
    assert res.status_code == 401
