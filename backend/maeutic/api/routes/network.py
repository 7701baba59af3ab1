"""Network Routes — friend list, relationship status, request toggle and blocking.

Invariants:
    - Toggle outcomes: removed | cancelled | accepted (with conversationId) | pending
    - Status always reports both block directions alongside the relationship
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_current_user
from maeutic.api.presenters import user_summary
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.services.account_service import get_user_or_404
from maeutic.services.network_service import NetworkService

router = APIRouter(prefix="/api", tags=["network"])


@router.get("/network/{user_id}")
async def get_network(user_id: int, db: AsyncSession = Depends(get_db)):
    user = await get_user_or_404(db, user_id)
    members = await NetworkService(db).members(user)
    return {"network": [user_summary(m) for m in members]}


@router.get("/network/status/{user_id}")
async def network_status(
    user_id: int,
    current: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    target = await get_user_or_404(db, user_id)
    status = await NetworkService(db).status(current, target)
    return {
        "status": status.value,
        "blockedByMe": current.is_blocked(target.id),
        "blockedByThem": current.is_blocked_by(target.id),
    }


@router.post("/network/toggle/{user_id}")
async def toggle_network(
    user_id: int,
    current: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await NetworkService(db).toggle(current, user_id)
    return {"success": True, **result}


@router.post("/block/toggle/{user_id}")
async def toggle_block(
    user_id: int,
    current: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    blocked = await NetworkService(db).toggle_block(current, user_id)
    return {"success": True, "blocked": blocked}
