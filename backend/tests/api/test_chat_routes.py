"""Global Chat Routes — verifies posting and reading the site-wide room."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import text

from maeutic.models.messaging import Message


async def test_send_and_list(client, auth, alice, bob, test_db):
    res = await client.post("/api/chat/send", json={"text": "hello all"}, headers=auth(alice))
    assert res.status_code == 201

    stored = (await test_db.execute(text("SELECT encrypted_content FROM messages"))).scalar_one()
    assert stored != "hello all"

    res = await client.get("/api/chat/messages", headers=auth(bob))
    messages = res.json()["messages"]
    assert [m["content"] for m in messages] == ["hello all"]
    assert messages[0]["isOwn"] is False


async def test_anonymous_can_read(client, auth, alice):
    await client.post("/api/chat/send", json={"text": "hi"}, headers=auth(alice))
    res = await client.get("/api/chat/messages")
    assert res.json()["messages"][0]["content"] == "hi"


async def test_send_requires_auth_and_text(client, auth, alice):
    assert (await client.post("/api/chat/send", json={"text": "x"})).status_code == 401
    assert (await client.post("/api/chat/send", json={}, headers=auth(alice))).status_code == 400
    assert (
        await client.post("/api/chat/send", json={"text": "   "}, headers=auth(alice))
    ).status_code == 400


async def test_private_messages_not_in_global_chat(client, auth, alice, bob):
    res = await client.get(f"/api/conversation/with/{bob.id}", headers=auth(alice))
    await client.post(
        f"/api/conversation/{res.json()['conversationId']}/message",
        json={"content": "private"}, headers=auth(alice),
    )

    res = await client.get("/api/chat/messages")

    assert res.json()["messages"] == []


async def _seed_room(test_db, sender, count: int):
    start = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    # inserted newest first so ordering comes from sent_at, not insertion
    for i in reversed(range(count)):
        message = Message(sender_id=sender.id, sent_at=start + timedelta(minutes=i))
        message.content = f"msg {i}"
        test_db.add(message)
    await test_db.commit()


async def test_full_history_oldest_first(client, alice, test_db):
    await _seed_room(test_db, alice, 120)

    messages = (await client.get("/api/chat/messages")).json()["messages"]

    assert len(messages) == 120
    assert [m["content"] for m in messages[:2]] == ["msg 0", "msg 1"]
    assert messages[-1]["content"] == "msg 119"


async def test_limit_keeps_newest_in_order(client, alice, test_db):
    await _seed_room(test_db, alice, 5)

    res = await client.get("/api/chat/messages", params={"limit": 2})

    assert [m["content"] for m in res.json()["messages"]] == ["msg 3", "msg 4"]
    assert (await client.get("/api/chat/messages", params={"limit": 0})).status_code == 400
