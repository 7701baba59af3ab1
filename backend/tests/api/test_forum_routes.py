"""Forum Routes — verifies categories, post CRUD permissions and like toggling."""

from maeutic.core.domain_types import UserType


async def test_list_forums(client, forum):
    res = await client.get("/api/forums")
    assert [f["title"] for f in res.json()["forums"]] == ["Artificial Intelligence"]


async def test_category_lists_forum_posts(client, alice, forum, make_post):
    await make_post(alice, forum, name="Transformers")

    res = await client.get("/api/forums/Artificial Intelligence")

    posts = res.json()["posts"]
    assert [p["name"] for p in posts] == ["Transformers"]
    assert posts[0]["user"]["username"] == "alice"
    assert posts[0]["likesCount"] == 0


async def test_general_lists_every_post(client, alice, forum, make_post, test_db):
    from maeutic.models.forum import Forum
    other = Forum(title="Biology")
    test_db.add(other)
    await test_db.commit()
    await make_post(alice, forum, name="one")
    await make_post(alice, other, name="two")

    res = await client.get("/api/forums/General")

    assert sorted(p["name"] for p in res.json()["posts"]) == ["one", "two"]


async def test_unknown_category_is_404(client):
    assert (await client.get("/api/forums/Nowhere")).status_code == 404


async def test_create_post_and_reply(client, auth, alice, forum):
    res = await client.post(
        "/api/forums/post",
        json={"forumId": forum.id, "name": "Question", "description": "How?"},
        headers=auth(alice),
    )
    assert res.status_code == 201
    parent = res.json()["post"]
    assert parent["isReply"] is False

    res = await client.post(
        "/api/forums/post",
        json={"forumId": forum.id, "name": "Answer", "description": "Like this", "parentId": parent["id"]},
        headers=auth(alice),
    )
    reply = res.json()["post"]
    assert reply["isReply"] is True
    assert reply["parentId"] == parent["id"]


async def test_create_post_unknown_forum_is_404(client, auth, alice):
    res = await client.post(
        "/api/forums/post",
        json={"forumId": 999, "name": "x", "description": "y"},
        headers=auth(alice),
    )
    assert res.status_code == 404


async def test_only_author_or_admin_edits(client, auth, alice, bob, make_user, forum, make_post):
    post = await make_post(alice, forum)
    admin = await make_user("admin", user_type=UserType.ADMIN.value)

    denied = await client.put(
        f"/api/forums/post/{post.id}", json={"name": "hijacked"}, headers=auth(bob),
    )
    own = await client.put(
        f"/api/forums/post/{post.id}", json={"name": "edited"}, headers=auth(alice),
    )
    moderated = await client.put(
        f"/api/forums/post/{post.id}", json={"description": "moderated"}, headers=auth(admin),
    )

    assert denied.status_code == 403
    assert own.json()["post"]["name"] == "edited"
    assert moderated.json()["post"]["description"] == "moderated"


async def test_delete_post(client, auth, alice, bob, forum, make_post):
    post = await make_post(alice, forum, liked_by=[bob])

    assert (await client.delete(f"/api/forums/post/{post.id}", headers=auth(bob))).status_code == 403
    assert (await client.delete(f"/api/forums/post/{post.id}", headers=auth(alice))).status_code == 200
    assert (await client.get(f"/api/forums/post/{post.id}")).status_code == 404


async def test_like_toggle_and_unlike(client, auth, alice, bob, forum, make_post):
    post = await make_post(alice, forum)

    liked = await client.post(f"/api/forums/post/{post.id}/like", headers=auth(bob))
    assert liked.json() == {"success": True, "liked": True, "likesCount": 1}

    again = await client.post(f"/api/forums/post/{post.id}/like", headers=auth(bob))
    assert again.json()["likesCount"] == 0

    await client.post(f"/api/forums/post/{post.id}/like", headers=auth(bob))
    removed = await client.delete(f"/api/forums/post/{post.id}/like", headers=auth(bob))
    assert removed.json()["likesCount"] == 0

    view = await client.get(f"/api/forums/post/{post.id}", headers=auth(bob))
    assert view.json()["post"]["isLiked"] is False
