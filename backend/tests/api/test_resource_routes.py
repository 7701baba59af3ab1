"""Resource Routes — verifies per-page resource links and admin-only writes.

Invariants:
    - Only chill, methodology and administrative are valid pages (400 otherwise)
    - Members and anonymous callers may read but not write (403)
    - A resource is not reachable through another page (404)
"""

import pytest


@pytest.fixture
async def admin(make_user):
    return await make_user("admin", user_type=1)


async def _create(client, auth, admin, page="methodology", **fields):
    body = {"title": "Zotero guide", "link": "https://example.org/zotero", **fields}
    res = await client.post(f"/api/resources/{page}", json=body, headers=auth(admin))
    assert res.status_code == 201
    return res.json()["resource"]


async def test_list_by_page(client, auth, admin):
    await _create(client, auth, admin, page="methodology")
    await _create(client, auth, admin, page="chill", title="Lo-fi playlist")

    res = await client.get("/api/resources/chill")

    assert res.status_code == 200
    assert [r["title"] for r in res.json()["resources"]] == ["Lo-fi playlist"]


async def test_unknown_page_is_400(client, auth, admin):
    assert (await client.get("/api/resources/gaming")).status_code == 400
    res = await client.post(
        "/api/resources/gaming", json={"title": "t", "link": "l"}, headers=auth(admin),
    )
    assert res.status_code == 400


async def test_members_and_anonymous_cannot_write(client, auth, alice):
    body = {"title": "t", "link": "l"}
    assert (await client.post("/api/resources/chill", json=body)).status_code == 403
    res = await client.post("/api/resources/chill", json=body, headers=auth(alice))
    assert res.status_code == 403


async def test_admin_updates_and_deletes(client, auth, admin):
    resource = await _create(client, auth, admin, description="Reference manager")

    res = await client.patch(
        f"/api/resources/methodology/{resource['id']}",
        json={"title": "Zotero in 10 minutes", "description": None},
        headers=auth(admin),
    )
    assert res.status_code == 200
    assert res.json()["resource"]["title"] == "Zotero in 10 minutes"
    assert res.json()["resource"]["description"] == "Reference manager"

    res = await client.delete(f"/api/resources/methodology/{resource['id']}", headers=auth(admin))
    assert res.json() == {"message": "Resource deleted"}
    assert (await client.get("/api/resources/methodology")).json() == {"resources": []}


async def test_resource_on_other_page_is_404(client, auth, admin):
    resource = await _create(client, auth, admin, page="administrative")

    res = await client.put(
        f"/api/resources/chill/{resource['id']}", json={"title": "moved"}, headers=auth(admin),
    )
    assert res.status_code == 404
