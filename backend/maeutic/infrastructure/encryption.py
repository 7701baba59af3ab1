"""Message Cipher — AES-256-GCM encryption of private message bodies.

Invariants:
    - Key is exactly 32 bytes (str keys are UTF-8 encoded, so a 32-char hex key works)
    - Every encrypt() draws a fresh 12-byte nonce — same plaintext, different tokens
    - Token layout: base64(nonce[12] || tag[16] || ciphertext)
    - Any decrypt failure (bad base64, truncated, wrong key, tampered, non-UTF-8
      plaintext) raises EncryptionError

Design Decisions:
    - Tag placed before ciphertext: keeps tokens readable by the previous PHP
      deployment, which stored messages in this layout
    - cryptography's AESGCM returns ciphertext||tag; we split and reorder
"""

import base64
import binascii
import logging
import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from maeutic.core.errors import EncryptionError

logger = logging.getLogger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16


def generate_key() -> str:
    """Random key suitable for MESSAGE_ENCRYPTION_KEY (32 hex chars)."""
    return secrets.token_hex(16)


class MessageCipher:
    """Symmetric cipher for message content."""

    def __init__(self, key: str | bytes):
        raw = key.encode("utf-8") if isinstance(key, str) else key
        if len(raw) != KEY_SIZE:
            raise EncryptionError(f"Encryption key must be exactly {KEY_SIZE} bytes")
        self._aesgcm = AESGCM(raw)

    def encrypt(self, plaintext: str) -> str:
        nonce = secrets.token_bytes(NONCE_SIZE)
        sealed = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        ciphertext, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]
        return base64.b64encode(nonce + tag + ciphertext).decode("ascii")

    def decrypt(self, token: str) -> str:
        try:
            data = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError):
            raise EncryptionError("Invalid encrypted data")
        if len(data) < NONCE_SIZE + TAG_SIZE:
            raise EncryptionError("Invalid encrypted data")

        nonce = data[:NONCE_SIZE]
        tag = data[NONCE_SIZE:NONCE_SIZE + TAG_SIZE]
        ciphertext = data[NONCE_SIZE + TAG_SIZE:]
        try:
            plaintext = self._aesgcm.decrypt(nonce, ciphertext + tag, None)
        except InvalidTag:
            raise EncryptionError("Decryption failed or data tampered")
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError:
            raise EncryptionError("Decrypted data is not valid UTF-8")
