"""Request Dependencies — bearer-token authentication for route handlers.

Invariants:
    - get_current_user raises NotAuthenticatedError (401) when the token is
      missing, invalid, expired, or names a deleted user
    - get_optional_user returns None only when NO token was sent; a bad token still fails
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.core.errors import NotAuthenticatedError
from maeutic.infrastructure.database import get_db
from maeutic.infrastructure.security import decode_access_token
from maeutic.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    if credentials is None:
        return None
    user = await db.get(User, decode_access_token(credentials.credentials))
    if user is None:
        raise NotAuthenticatedError("Invalid token")
    return user


async def get_current_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    if user is None:
        raise NotAuthenticatedError()
    return user
