"""Credentials — verifies bcrypt hashing and JWT access tokens."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from maeutic.config import get_settings
from maeutic.core.errors import NotAuthenticatedError
from maeutic.infrastructure.security import (
    create_access_token, decode_access_token, hash_password, verify_password,
)


def test_hash_and_verify():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_verify_rejects_missing_or_malformed_hash():
    assert not verify_password("x", None)
    assert not verify_password("x", "not-a-bcrypt-hash")


def test_token_round_trip():
    assert decode_access_token(create_access_token(42)) == 42


def test_expired_token_rejected():
    settings = get_settings()
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    token = jwt.encode(
        {"sub": "42", "iat": past, "exp": past + timedelta(minutes=1)},
        settings.jwt_secret, algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(NotAuthenticatedError, match="expired"):
        decode_access_token(token)


def test_token_signed_with_other_secret_rejected():
    token = jwt.encode({"sub": "42"}, "another-secret-another-secret-another", algorithm="HS256")
    with pytest.raises(NotAuthenticatedError, match="Invalid token"):
        decode_access_token(token)


def test_garbage_token_rejected():
    with pytest.raises(NotAuthenticatedError):
        decode_access_token("garbage")
