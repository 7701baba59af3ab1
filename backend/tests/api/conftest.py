"""API test fixtures — FastAPI test client, seeded users and auth headers.

Invariants:
    - get_db dependency overridden to use the test engine
    - db_manager patched so readiness checks hit the test engine
    - Users are inserted directly; one bcrypt hash is shared by all of them

Design Decisions:
    - Bearer tokens minted with create_access_token instead of calling /api/login:
      route tests stay independent of the login flow
"""

import pytest
from httpx import ASGITransport, AsyncClient

from maeutic.infrastructure.database import get_db, DatabaseSessionManager
import maeutic.infrastructure.database as db_module
from maeutic.infrastructure.security import create_access_token, hash_password
from maeutic.main import app
from maeutic.models.forum import Forum, Post, PostLike
from maeutic.models.user import User, UserQuestion

PASSWORD = "password123"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def make_user(test_db):
    """Factory: insert a user with optional profile fields and taggable answers."""
    async def _make(username: str, tags: list[str] | None = None, **fields) -> User:
        user = User(
            email=f"{username}@univ.example",
            username=username,
            password=PASSWORD_HASH,
            first_name=fields.pop("first_name", username.title()),
            last_name=fields.pop("last_name", "Tester"),
            network=[],
            blocked=[],
            blocked_by=[],
            **fields,
        )
        user.questions = [
            UserQuestion(question="Taggable Question 0", answer=tag) for tag in tags or []
        ]
        test_db.add(user)
        await test_db.commit()
        return user
    return _make


@pytest.fixture
async def alice(make_user):
    return await make_user("alice", specialization="Computer Science", affiliation_location="Lyon")


@pytest.fixture
async def bob(make_user):
    return await make_user("bob", specialization="Computer Science", affiliation_location="Lyon")


@pytest.fixture
async def carol(make_user):
    return await make_user("carol", specialization="Medieval History", affiliation_location="Rennes")


@pytest.fixture
def auth():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return _headers


@pytest.fixture
async def forum(test_db):
    forum = Forum(title="Artificial Intelligence", body="AI discussions")
    test_db.add(forum)
    await test_db.commit()
    return forum


@pytest.fixture
def make_post(test_db):
    async def _make(author: User, forum: Forum, name: str = "A post", liked_by=()) -> Post:
        post = Post(
            name=name, description="Body text", user_id=author.id, forum_id=forum.id,
        )
        test_db.add(post)
        await test_db.flush()
        for user in liked_by:
            test_db.add(PostLike(user_id=user.id, post_id=post.id))
        await test_db.commit()
        return post
    return _make
