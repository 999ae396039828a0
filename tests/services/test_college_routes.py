"""College Routes — public directory listing and search; signed-in community page and feed."""

from uuid import uuid4


async def test_list_colleges_by_name_with_post_counts(client, student_headers, seed_posts):
    res = await client.get("/api/v1/colleges", headers=student_headers)
    assert res.status_code == 200
    body = res.json()
    assert [c["name"] for c in body] == ["Example University", "State College"]
    assert [c["post_count"] for c in body] == [3, 0]


async def test_search_is_case_insensitive_on_name(client, student_headers):
    res = await client.get(
        "/api/v1/colleges", params={"q": "STATE"}, headers=student_headers,
    )
    assert [c["name"] for c in res.json()] == ["State College"]


async def test_search_does_not_match_domain(client, student_headers):
    res = await client.get(
        "/api/v1/colleges", params={"q": "exampleu.edu"}, headers=student_headers,
    )
    assert res.json() == []


async def test_college_detail_counts(client, student_headers, colleges, seed_posts):
    res = await client.get(
        f"/api/v1/colleges/{colleges['exampleu'].id}", headers=student_headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["domain"] == "student.exampleu.edu"
    assert body["student_count"] == 1
    assert body["post_count"] == 3


async def test_unknown_college_is_404(client, student_headers):
    res = await client.get(f"/api/v1/colleges/{uuid4()}", headers=student_headers)
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_college_feed(client, student_headers, colleges, seed_posts):
    url = f"/api/v1/colleges/{colleges['exampleu'].id}/posts"
    res = await client.get(url, headers=student_headers)
    assert [p["type"] for p in res.json()] == ["video", "photo", "article"]

    photos = await client.get(url, params={"type": "photo"}, headers=student_headers)
    assert [p["type"] for p in photos.json()] == ["photo"]

    empty = await client.get(
        f"/api/v1/colleges/{colleges['state'].id}/posts", headers=student_headers,
    )
    assert empty.json() == []


async def test_college_feed_for_unknown_college_is_404(client, student_headers):
    res = await client.get(f"/api/v1/colleges/{uuid4()}/posts", headers=student_headers)
    assert res.status_code == 404


async def test_college_picker_is_public(client, colleges):
    res = await client.get("/api/v1/colleges", params={"q": "example"})
    assert res.status_code == 200
    body = res.json()
    assert [c["name"] for c in body] == ["Example University"]
    assert body[0]["id"] == str(colleges["exampleu"].id)
    assert body[0]["domain"] == "student.exampleu.edu"


async def test_community_pages_require_identity(client, colleges):
    college_id = colleges["exampleu"].id
    detail = await client.get(f"/api/v1/colleges/{college_id}")
    assert detail.status_code == 401
    feed = await client.get(f"/api/v1/colleges/{college_id}/posts")
    assert feed.status_code == 401
