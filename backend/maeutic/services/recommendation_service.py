"""Recommendation Service — loads profiles and forum activity, delegates ranking to core.

Invariants:
    - Scoring itself is pure (core/recommendation.py); this module only does IO
    - Users in a block relation with the current user (either direction) are never returned
    - Like/comment counts are DISTINCT per (user, forum): joining posts to both
      likes and comments must not multiply counts

Design Decisions:
    - Three aggregate queries (users, liked forums, forum member stats) instead of
      per-candidate lookups: cost stays flat in the number of candidates
    - Map endpoint composition lives here too: it is recommendations plus padding
"""

import logging
import time

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.core.recommendation import (
    BehavioralData, ForumInterest, ForumMemberStats, ProfileFeatures, ScoredCandidate,
    build_forum_activity, extract_taggable_answers, score_candidates,
)
from maeutic.models.forum import Comment, Forum, Post, PostLike
from maeutic.models.user import User

logger = logging.getLogger(__name__)

MAP_PADDING_SCORE = 0.05


def profile_features(user: User) -> ProfileFeatures:
    return ProfileFeatures(
        user_id=user.id,
        specialization=user.specialization or "",
        research_topic=user.research_topic or "",
        affiliation_location=user.affiliation_location or "",
        taggable_answers=extract_taggable_answers(
            (q.question, q.answer) for q in user.questions
        ),
    )


class RecommendationService:
    """Ranks other users for a given user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _all_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def users_by_id(self, ids: list[int]) -> list[User]:
        if not ids:
            return []
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return list(result.scalars().all())

    async def _forum_interests(self, user_id: int) -> list[ForumInterest]:
        like_count = func.count(PostLike.id)
        result = await self.db.execute(
            select(Forum.id, Forum.title, like_count)
            .select_from(PostLike)
            .join(Post, PostLike.post_id == Post.id)
            .join(Forum, Post.forum_id == Forum.id)
            .where(PostLike.user_id == user_id)
            .group_by(Forum.id, Forum.title)
            .order_by(like_count.desc())
        )
        return [ForumInterest(forum_id=f, title=t, like_count=c) for f, t, c in result.all()]

    async def _forum_member_rows(
        self, forum_ids: list[int],
    ) -> list[tuple[int, str, int, ForumMemberStats]]:
        if not forum_ids:
            return []
        result = await self.db.execute(
            select(
                Forum.id,
                Forum.title,
                Post.user_id,
                func.count(func.distinct(Post.id)),
                func.count(func.distinct(PostLike.id)),
                func.count(func.distinct(Comment.id)),
            )
            .select_from(Post)
            .join(Forum, Post.forum_id == Forum.id)
            .outerjoin(PostLike, PostLike.post_id == Post.id)
            .outerjoin(Comment, Comment.post_id == Post.id)
            .where(Forum.id.in_(forum_ids))
            .group_by(Forum.id, Forum.title, Post.user_id)
        )
        return [
            (forum_id, title, user_id, ForumMemberStats(posts, likes, comments))
            for forum_id, title, user_id, posts, likes, comments in result.all()
        ]

    async def behavioral_data(self, user: User) -> BehavioralData:
        interests = await self._forum_interests(user.id)
        rows = await self._forum_member_rows([i.forum_id for i in interests])
        return BehavioralData(interests=interests, activity=build_forum_activity(rows))

    async def recommend(
        self, user: User, limit: int | None = None, users: list[User] | None = None,
    ) -> list[ScoredCandidate]:
        started = time.perf_counter()
        users = users if users is not None else await self._all_users()
        candidates = [
            profile_features(u) for u in users
            if not (user.is_blocked(u.id) or user.is_blocked_by(u.id))
        ]
        ranked = score_candidates(
            profile_features(user),
            candidates,
            friend_ids=user.network_ids(),
            behavioral=await self.behavioral_data(user),
            limit=limit,
        )
        logger.info(
            "Recommendations computed",
            extra={
                "user_id": user.id,
                "candidate_count": len(candidates),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return ranked

    async def map_users(
        self, user: User | None, max_users: int, recommendations: int,
    ) -> list[tuple[User, str, float | None]]:
        """Users shown on the map as (user, kind, score); kind is self/network/recommended."""
        users = await self._all_users()
        if user is None:
            return [(u, "user", None) for u in users[:max_users]]

        by_id = {u.id: u for u in users}
        network_ids = set(user.network_ids())
        entries: list[tuple[User, str, float | None]] = [(user, "self", None)]
        entries += [(by_id[i], "network", None) for i in user.network_ids() if i in by_id]

        ranked = await self.recommend(user, limit=recommendations, users=users)
        recommended_ids = {c.user_id for c in ranked}
        entries += [(by_id[c.user_id], "recommended", c.score) for c in ranked]

        for other in users:
            if len(recommended_ids) >= recommendations:
                break
            if (
                other.id == user.id
                or other.id in network_ids
                or other.id in recommended_ids
            ):
                continue
            recommended_ids.add(other.id)
            entries.append((other, "recommended", MAP_PADDING_SCORE))

        visible = [
            entry for entry in entries
            if entry[0].id == user.id
            or not (user.is_blocked(entry[0].id) or user.is_blocked_by(entry[0].id))
        ]
        return visible[:max_users]
