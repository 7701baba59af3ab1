"""Map Routes — users shown on the researcher map and plain recommendations.

Invariants:
    - Anonymous callers get the first map_max_users users, unscored
    - Authenticated callers never see users in a block relation with them
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.api.deps import get_current_user, get_optional_user
from maeutic.api.presenters import user_summary
from maeutic.config import get_settings
from maeutic.infrastructure.database import get_db
from maeutic.models.user import User
from maeutic.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/api", tags=["maps"])


def _map_entry(user: User, kind: str, score: float | None) -> dict:
    return {
        **user_summary(user),
        "affiliationLocation": user.affiliation_location,
        "specialization": user.specialization,
        "researchTopic": user.research_topic,
        "type": kind,
        "score": score,
    }


@router.get("/maps/users")
async def map_users(
    user: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    settings = get_settings()
    entries = await RecommendationService(db).map_users(
        user, settings.map_max_users, settings.map_recommendations,
    )
    return {"users": [_map_entry(*entry) for entry in entries]}


@router.get("/recommendations")
async def recommendations(
    limit: int | None = Query(None, ge=1, le=200),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    service = RecommendationService(db)
    ranked = await service.recommend(user, limit or get_settings().recommendation_limit)
    by_id = {u.id: u for u in await service.users_by_id([c.user_id for c in ranked])}
    return {
        "recommendations": [
            {"user": user_summary(by_id[c.user_id]), "score": c.score, "details": c.details}
            for c in ranked if c.user_id in by_id
        ],
    }
