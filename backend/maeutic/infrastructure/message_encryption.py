"""Message Encryption Hooks — transparent encrypt-on-write / decrypt-on-read for Message.

Invariants:
    - before_insert / before_update: Message.content (if set) is encrypted into
      encrypted_content; plaintext never reaches the database
    - load / refresh: encrypted_content is decrypted into Message.content
    - A message that cannot be decrypted shows UNDECRYPTABLE_PLACEHOLDER and is
      never re-encrypted with the placeholder on a later flush
    - Writing without an installed cipher raises EncryptionError; reading without
      one degrades to the placeholder

Design Decisions:
    - SQLAlchemy mapper/instance events over explicit service calls: every code
      path that persists a Message (routes, tests, scripts) is covered
    - Process-wide cipher installed at startup, same lifecycle as db_manager
"""

import logging

from sqlalchemy import event

from maeutic.core.errors import EncryptionError
from maeutic.infrastructure.encryption import MessageCipher
from maeutic.models.messaging import Message

logger = logging.getLogger(__name__)

UNDECRYPTABLE_PLACEHOLDER = "[Encrypted message - unable to decrypt]"

# Singleton (initialized on startup)
_cipher: MessageCipher | None = None


def init_message_encryption(key: str | bytes) -> MessageCipher:
    global _cipher
    _cipher = MessageCipher(key)
    return _cipher


def reset_message_encryption() -> None:
    global _cipher
    _cipher = None


def _encrypt_content(target: Message) -> None:
    if target.content is None or target._undecryptable:
        return
    if _cipher is None:
        raise EncryptionError("Message encryption not initialized")
    target.encrypted_content = _cipher.encrypt(target.content)


def _decrypt_content(target: Message) -> None:
    encrypted = target.__dict__.get("encrypted_content")
    if not encrypted:
        return
    try:
        if _cipher is None:
            raise EncryptionError("Message encryption not initialized")
        plaintext = _cipher.decrypt(encrypted)
    except EncryptionError as e:
        logger.warning(f"Message {target.id} could not be decrypted: {e.message}")
        target._plaintext = UNDECRYPTABLE_PLACEHOLDER
        target._undecryptable = True
        return
    # bypass the setter: loading must not mark the row dirty
    target._plaintext = plaintext
    target._undecryptable = False


@event.listens_for(Message, "before_insert")
def _before_insert(mapper, connection, target: Message) -> None:
    _encrypt_content(target)


@event.listens_for(Message, "before_update")
def _before_update(mapper, connection, target: Message) -> None:
    _encrypt_content(target)


@event.listens_for(Message, "load")
def _on_load(target: Message, context) -> None:
    _decrypt_content(target)


@event.listens_for(Message, "refresh")
def _on_refresh(target: Message, context, attrs) -> None:
    if attrs is None or "encrypted_content" in attrs:
        _decrypt_content(target)
