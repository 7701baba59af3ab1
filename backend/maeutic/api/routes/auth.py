"""Auth Routes — registration, login, current user and availability checks.

Invariants:
    - Login returns a bearer token plus the user summary
    - /api/me never fails for anonymous callers: {"user": null}
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_optional_user
from maeutic.api.presenters import user_summary
from maeutic.infrastructure.database import get_db
from maeutic.infrastructure.security import create_access_token
from maeutic.models.user import User
from maeutic.schemas.account import LoginRequest, RegisterRequest
from maeutic.services.account_service import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    user = await AccountService(db).register(body)
    return {"success": True, "user": user_summary(user)}


@router.post("/login")
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await AccountService(db).authenticate(body.username, body.password)
    logger.info("User logged in", extra={"user_id": user.id})
    return {
        "token": create_access_token(user.id),
        "tokenType": "bearer",
        "user": user_summary(user),
    }


@router.get("/me")
async def me(user: User | None = Depends(get_optional_user)):
    return {"user": user_summary(user)}


@router.get("/check-email")
async def check_email(
    email: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db),
):
    return {"available": await AccountService(db).find_by_email(email) is None}


@router.get("/check-username")
async def check_username(
    username: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db),
):
    return {"available": await AccountService(db).find_by_username(username) is None}
