"""Message Encryption Hooks — verifies encrypt-on-write and decrypt-on-read via ORM events.

Tests:
    - The database only ever holds ciphertext
    - A fresh session sees plaintext content after load
    - Editing content re-encrypts, even after expire or rollback; loading alone
      never marks the row dirty
    - Non-UTF-8 plaintext under a valid tag degrades to the placeholder
    - Undecryptable rows show the placeholder and are not overwritten
    - Writing without an installed cipher fails instead of storing plaintext
"""

import base64
import os
from datetime import datetime, timezone

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from sqlalchemy import select, text

from maeutic.config import get_settings
from maeutic.core.errors import EncryptionError
from maeutic.infrastructure.message_encryption import (
    UNDECRYPTABLE_PLACEHOLDER, reset_message_encryption,
)
from maeutic.models.messaging import Message


async def _raw_content(session, message_id: int) -> str:
    result = await session.execute(
        text("SELECT encrypted_content FROM messages WHERE id = :id"), {"id": message_id},
    )
    return result.scalar_one()


async def _save(session, content: str) -> Message:
    message = Message()
    message.content = content
    session.add(message)
    await session.commit()
    return message


async def _reload(factory, message_id: int) -> Message:
    async with factory() as session:
        result = await session.execute(select(Message).where(Message.id == message_id))
        return result.scalar_one()


async def test_database_holds_ciphertext_only(test_db, message_cipher):
    message = await _save(test_db, "meet me at the library")

    stored = await _raw_content(test_db, message.id)

    assert "library" not in stored
    assert message_cipher.decrypt(stored) == "meet me at the library"


async def test_content_decrypted_on_load(test_db, test_session_factory):
    message = await _save(test_db, "bonjour")

    loaded = await _reload(test_session_factory, message.id)

    assert loaded.content == "bonjour"


async def test_loading_does_not_mark_dirty(test_db, test_session_factory):
    message = await _save(test_db, "hello")

    async with test_session_factory() as session:
        loaded = (await session.execute(
            select(Message).where(Message.id == message.id),
        )).scalar_one()
        assert loaded.content == "hello"
        assert loaded not in session.dirty


async def test_editing_content_reencrypts(test_db, test_session_factory):
    message = await _save(test_db, "first draft")
    before = await _raw_content(test_db, message.id)

    async with test_session_factory() as session:
        loaded = (await session.execute(
            select(Message).where(Message.id == message.id),
        )).scalar_one()
        loaded.content = "final version"
        await session.commit()

    after = await _raw_content(test_db, message.id)
    assert after != before
    assert (await _reload(test_session_factory, message.id)).content == "final version"


async def test_editing_expired_message_reencrypts(test_db, test_session_factory):
    message = await _save(test_db, "first")
    test_db.expire(message, ["encrypted_content"])

    message.content = "second"
    await test_db.commit()

    assert (await _reload(test_session_factory, message.id)).content == "second"


async def test_editing_after_rollback_reencrypts(test_db, test_session_factory):
    message = await _save(test_db, "first")
    message_id = message.id
    await test_db.rollback()

    message.content = "second"
    await test_db.commit()

    assert (await _reload(test_session_factory, message_id)).content == "second"


async def test_non_utf8_row_shows_placeholder(test_db, test_session_factory, message_cipher):
    message = await _save(test_db, "placeholder me")
    nonce = os.urandom(12)
    sealed = AESGCM(get_settings().message_encryption_key.encode()).encrypt(nonce, "café".encode("latin-1"), None)
    token = base64.b64encode(nonce + sealed[-16:] + sealed[:-16]).decode("ascii")
    await test_db.execute(
        text("UPDATE messages SET encrypted_content = :token WHERE id = :id"),
        {"token": token, "id": message.id},
    )
    await test_db.commit()

    loaded = await _reload(test_session_factory, message.id)

    assert loaded.content == UNDECRYPTABLE_PLACEHOLDER


async def test_tampered_row_shows_placeholder(test_db, test_session_factory):
    message = await _save(test_db, "original")
    await test_db.execute(
        text("UPDATE messages SET encrypted_content = 'bm90LXZhbGlk' WHERE id = :id"),
        {"id": message.id},
    )
    await test_db.commit()

    loaded = await _reload(test_session_factory, message.id)

    assert loaded.content == UNDECRYPTABLE_PLACEHOLDER


async def test_undecryptable_row_is_not_overwritten(test_db, test_session_factory):
    message = await _save(test_db, "original")
    await test_db.execute(
        text("UPDATE messages SET encrypted_content = 'bm90LXZhbGlk' WHERE id = :id"),
        {"id": message.id},
    )
    await test_db.commit()

    async with test_session_factory() as session:
        loaded = (await session.execute(
            select(Message).where(Message.id == message.id),
        )).scalar_one()
        loaded.sent_at = datetime.now(timezone.utc)
        await session.commit()

    assert await _raw_content(test_db, message.id) == "bm90LXZhbGlk"


async def test_write_without_cipher_fails(test_db):
    reset_message_encryption()
    message = Message()
    message.content = "must not be stored in clear"
    test_db.add(message)

    with pytest.raises(EncryptionError):
        await test_db.commit()


async def test_read_without_cipher_degrades_to_placeholder(test_db, test_session_factory):
    message = await _save(test_db, "hello")
    reset_message_encryption()

    loaded = await _reload(test_session_factory, message.id)

    assert loaded.content == UNDECRYPTABLE_PLACEHOLDER
