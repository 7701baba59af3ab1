"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Env vars set before any maeutic import (get_settings() is cached)
    - Every test gets a fresh in-memory SQLite database
    - The message cipher is installed for every test and removed afterwards

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so data seeded through test_db is visible to request sessions
"""

import os

# Ensure tests never talk to a real database or reuse production secrets
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("MESSAGE_ENCRYPTION_KEY", "test-key-0123456789abcdef0123456")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-with-at-least-32-bytes!!")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from maeutic.config import get_settings  # noqa: E402
from maeutic.db.base import Base  # noqa: E402
import maeutic.models  # noqa: E402,F401
from maeutic.infrastructure.message_encryption import (  # noqa: E402
    init_message_encryption, reset_message_encryption,
)


@pytest.fixture(autouse=True)
def message_cipher():
    cipher = init_message_encryption(get_settings().message_encryption_key)
    yield cipher
    reset_message_encryption()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
