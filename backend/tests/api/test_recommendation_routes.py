"""Recommendations & Map — verifies ranking over real data, block filtering and map composition.

Invariants:
    - Liked forums pull active posters up the ranking
    - Blocked users and network members never appear as recommendations
    - The map lists self, then network, then recommendations, capped by settings
"""

from maeutic.config import get_settings
from maeutic.models.forum import Comment


async def _connect(client, auth, a, b):
    await client.post(f"/api/network/toggle/{b.id}", headers=auth(a))
    await client.post(f"/api/network/toggle/{a.id}", headers=auth(b))


async def test_similar_profile_ranks_first(client, auth, alice, bob, carol):
    res = await client.get("/api/recommendations", headers=auth(alice))

    ranked = res.json()["recommendations"]
    assert [r["user"]["username"] for r in ranked] == ["bob", "carol"]
    assert ranked[0]["score"] > ranked[1]["score"]
    assert set(ranked[0]["details"]) >= {"behavioral", "traditional"}


async def test_forum_activity_lifts_candidate(
    client, auth, make_user, alice, forum, make_post, test_db,
):
    quiet = await make_user("quiet")
    active = await make_user("active")
    liked_post = await make_post(active, forum, liked_by=[alice])
    test_db.add(Comment(body="great", user_id=quiet.id, post_id=liked_post.id))
    await test_db.commit()

    res = await client.get("/api/recommendations", headers=auth(alice))

    ranked = res.json()["recommendations"]
    assert ranked[0]["user"]["username"] == "active"
    assert ranked[0]["details"]["behavioral"] > 0.18


async def test_blocked_and_network_excluded(client, auth, alice, bob, carol, make_user):
    dave = await make_user("dave")
    await client.post(f"/api/block/toggle/{alice.id}", headers=auth(carol))
    await _connect(client, auth, alice, bob)

    res = await client.get("/api/recommendations", headers=auth(alice))

    assert [r["user"]["username"] for r in res.json()["recommendations"]] == [dave.username]


async def test_limit_parameter(client, auth, alice, bob, carol):
    res = await client.get("/api/recommendations", params={"limit": 1}, headers=auth(alice))
    assert len(res.json()["recommendations"]) == 1


async def test_map_for_member(client, auth, alice, bob, carol, make_user):
    blocked = await make_user("blocked")
    await _connect(client, auth, alice, bob)
    await client.post(f"/api/block/toggle/{blocked.id}", headers=auth(alice))

    res = await client.get("/api/maps/users", headers=auth(alice))

    users = res.json()["users"]
    assert [(u["username"], u["type"]) for u in users] == [
        ("alice", "self"), ("bob", "network"), ("carol", "recommended"),
    ]
    assert users[2]["score"] is not None


async def test_map_for_anonymous(client, alice, bob):
    res = await client.get("/api/maps/users")
    users = res.json()["users"]
    assert [u["username"] for u in users] == ["alice", "bob"]
    assert all(u["score"] is None for u in users)


async def test_map_caps_recommendations(client, auth, alice, make_user, monkeypatch):
    others = [await make_user(f"user{i}") for i in range(3)]
    monkeypatch.setattr(get_settings(), "map_recommendations", 2)

    res = await client.get("/api/maps/users", headers=auth(alice))

    recommended = [u for u in res.json()["users"] if u["type"] == "recommended"]
    assert len(recommended) == 2
    assert {u["username"] for u in recommended} <= {o.username for o in others}


async def test_map_caps_total_users(client, auth, alice, bob, carol, monkeypatch):
    monkeypatch.setattr(get_settings(), "map_max_users", 2)

    res = await client.get("/api/maps/users", headers=auth(alice))

    users = res.json()["users"]
    assert len(users) == 2
    assert users[0]["type"] == "self"
