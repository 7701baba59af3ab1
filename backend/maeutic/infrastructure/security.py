"""Credentials — bcrypt password hashing and JWT access tokens.

Invariants:
    - Passwords are truncated to 72 bytes before hashing (bcrypt limit)
    - Access tokens carry sub (user id as str), iat and exp; HS256 by default
    - decode_access_token raises NotAuthenticatedError for any invalid/expired token
"""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from maeutic.config import get_settings
from maeutic.core.errors import NotAuthenticatedError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    password_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=12)).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            password.encode("utf-8")[:72], password_hash.encode("utf-8"),
        )
    except ValueError as e:
        logger.error(f"Malformed password hash: {e}")
        return False


def create_access_token(user_id: int) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=settings.jwt_expiry_seconds),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """Return the user id carried by a valid token."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
        return int(payload["sub"])
    except jwt.ExpiredSignatureError:
        raise NotAuthenticatedError("Token expired")
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise NotAuthenticatedError("Invalid token")
