"""Message Cipher — verifies AES-256-GCM token format and failure modes.

Tests:
    - Round trip, including non-ASCII text
    - Fresh nonce per call; token layout nonce || tag || ciphertext
    - Wrong key, tampering, bad base64 and truncated tokens raise EncryptionError
"""

import base64

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from maeutic.core.errors import EncryptionError
from maeutic.infrastructure.encryption import MessageCipher, generate_key

KEY = "0123456789abcdef0123456789abcdef"


@pytest.fixture
def cipher():
    return MessageCipher(KEY)


def test_round_trip_unicode(cipher):
    text = "Réunion demain à 10h, salle 2 ✓"
    assert cipher.decrypt(cipher.encrypt(text)) == text


def test_same_plaintext_gives_different_tokens(cipher):
    assert cipher.encrypt("hello") != cipher.encrypt("hello")


def test_token_layout_is_nonce_tag_ciphertext(cipher):
    raw = base64.b64decode(cipher.encrypt("hello"))
    assert len(raw) == 12 + 16 + len("hello")


def test_accepts_bytes_key():
    c = MessageCipher(KEY.encode())
    assert c.decrypt(MessageCipher(KEY).encrypt("x")) == "x"


@pytest.mark.parametrize("key", ["short", KEY + "x", ""])
def test_rejects_keys_that_are_not_32_bytes(key):
    with pytest.raises(EncryptionError):
        MessageCipher(key)


def test_generate_key_is_usable():
    key = generate_key()
    assert len(key) == 32
    int(key, 16)
    c = MessageCipher(key)
    assert c.decrypt(c.encrypt("ok")) == "ok"


def test_wrong_key_fails(cipher):
    token = cipher.encrypt("secret")
    other = MessageCipher("fedcba9876543210fedcba9876543210")
    with pytest.raises(EncryptionError, match="tampered"):
        other.decrypt(token)


def test_tampered_ciphertext_fails(cipher):
    raw = bytearray(base64.b64decode(cipher.encrypt("secret")))
    raw[-1] ^= 0x01
    with pytest.raises(EncryptionError, match="tampered"):
        cipher.decrypt(base64.b64encode(bytes(raw)).decode())


def test_invalid_base64_fails(cipher):
    with pytest.raises(EncryptionError, match="Invalid encrypted data"):
        cipher.decrypt("not base64 !!")


def test_truncated_token_fails(cipher):
    short = base64.b64encode(b"\x00" * 20).decode()
    with pytest.raises(EncryptionError, match="Invalid encrypted data"):
        cipher.decrypt(short)


def test_non_utf8_plaintext_fails(cipher):
    nonce = b"\x00" * 12
    sealed = AESGCM(KEY.encode()).encrypt(nonce, "café".encode("latin-1"), None)
    token = base64.b64encode(nonce + sealed[-16:] + sealed[:-16]).decode("ascii")

    with pytest.raises(EncryptionError):
        cipher.decrypt(token)
