"""Conversation Routes — verifies private messaging, access checks and encryption at rest.

Invariants:
    - Only participants read or post; blocked pairs get 403
    - Stored message bodies are ciphertext; responses carry plaintext
    - One conversation per pair regardless of who opens it
"""

import re

from sqlalchemy import text


async def _open(client, auth, a, b) -> int:
    res = await client.get(f"/api/conversation/with/{b.id}", headers=auth(a))
    assert res.status_code == 200
    return res.json()["conversationId"]


async def test_with_user_is_symmetric(client, auth, alice, bob):
    first = await _open(client, auth, alice, bob)
    second = await _open(client, auth, bob, alice)
    assert first == second


async def test_with_self_or_unknown_is_400(client, auth, alice):
    assert (await client.get(f"/api/conversation/with/{alice.id}", headers=auth(alice))).status_code == 400
    assert (await client.get("/api/conversation/with/9999", headers=auth(alice))).status_code == 400


async def test_send_and_read_messages(client, auth, alice, bob, test_db, message_cipher):
    conversation_id = await _open(client, auth, alice, bob)

    res = await client.post(
        f"/api/conversation/{conversation_id}/message",
        json={"content": "  Hello Bob  "},
        headers=auth(alice),
    )

    assert res.status_code == 201
    sent = res.json()["message"]
    assert sent["content"] == "Hello Bob"
    assert sent["isOwn"] is True
    assert re.fullmatch(r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}", sent["sentAt"])

    stored = (await test_db.execute(text("SELECT encrypted_content FROM messages"))).scalar_one()
    assert "Hello" not in stored
    assert message_cipher.decrypt(stored) == "Hello Bob"

    res = await client.get(f"/api/conversation/{conversation_id}/messages", headers=auth(bob))
    messages = res.json()["messages"]
    assert [m["content"] for m in messages] == ["Hello Bob"]
    assert messages[0]["isOwn"] is False
    assert messages[0]["sender"]["username"] == "alice"


async def test_messages_in_order(client, auth, alice, bob):
    conversation_id = await _open(client, auth, alice, bob)
    for body, user in (("one", alice), ("two", bob), ("three", alice)):
        await client.post(
            f"/api/conversation/{conversation_id}/message",
            json={"content": body}, headers=auth(user),
        )

    res = await client.get(f"/api/conversation/{conversation_id}/messages", headers=auth(alice))

    assert [m["content"] for m in res.json()["messages"]] == ["one", "two", "three"]


async def test_empty_message_rejected(client, auth, alice, bob):
    conversation_id = await _open(client, auth, alice, bob)
    res = await client.post(
        f"/api/conversation/{conversation_id}/message",
        json={"content": "   "}, headers=auth(alice),
    )
    assert res.status_code == 400


async def test_outsider_cannot_read_or_post(client, auth, alice, bob, carol):
    conversation_id = await _open(client, auth, alice, bob)

    read = await client.get(f"/api/conversation/{conversation_id}/messages", headers=auth(carol))
    post = await client.post(
        f"/api/conversation/{conversation_id}/message",
        json={"content": "hi"}, headers=auth(carol),
    )

    assert read.status_code == 403
    assert post.status_code == 403


async def test_blocked_pair_cannot_message(client, auth, alice, bob):
    conversation_id = await _open(client, auth, alice, bob)
    await client.post(f"/api/block/toggle/{alice.id}", headers=auth(bob))

    read = await client.get(f"/api/conversation/{conversation_id}/messages", headers=auth(alice))
    reopen = await client.get(f"/api/conversation/with/{bob.id}", headers=auth(alice))

    assert read.status_code == 403
    assert reopen.status_code == 403


async def test_list_conversations_with_last_message(client, auth, alice, bob, carol):
    with_bob = await _open(client, auth, alice, bob)
    with_carol = await _open(client, auth, alice, carol)
    await client.post(
        f"/api/conversation/{with_bob}/message", json={"content": "first"}, headers=auth(alice),
    )
    await client.post(
        f"/api/conversation/{with_bob}/message", json={"content": "latest"}, headers=auth(bob),
    )
    await client.post(f"/api/block/toggle/{carol.id}", headers=auth(alice))

    res = await client.get("/api/conversations", headers=auth(alice))

    items = res.json()["conversations"]
    assert [c["id"] for c in items] == [with_carol, with_bob]
    assert items[0]["isBlocked"] is True
    assert items[0]["lastMessage"] is None
    assert items[1]["otherUser"]["username"] == "bob"
    assert items[1]["lastMessage"]["content"] == "latest"


async def test_unknown_conversation_is_404(client, auth, alice):
    res = await client.get("/api/conversation/999/messages", headers=auth(alice))
    assert res.status_code == 404
