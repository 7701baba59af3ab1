"""Recommendation Scoring — ranks candidate connections by weighted similarity.

Invariants:
    - Pure: inputs are plain dataclasses built by the service layer, no IO
    - Every returned score is within [0.0, 1.0]
    - The current user and users already in their network are never scored
    - Output is sorted by score descending; equal scores keep candidate order

Design Decisions:
    - Behavioral signal (likes on forum posts) dominates at 0.6; profile
      similarity shares the remaining 0.4 (specialization 0.16, research
      topic 0.12, affiliation location 0.08, taggable answers 0.04)
    - Two post-passes: a guaranteed floor so nobody scores ~0, then a diversity
      boost for candidates active in forums whose average contribution is low
"""

from dataclasses import dataclass, field
from typing import Iterable

from maeutic.core.similarity import (
    is_blank, location_similarity, question_similarity, string_similarity,
)

SCORE_WEIGHTS = {
    "behavioral": 0.6,
    "specialization": 0.16,
    "research_topic": 0.12,
    "affiliation_location": 0.08,
    "taggable_questions": 0.04,
}

BASE_SCORE_WEIGHTS = {
    "specialization": 0.3,
    "research_topic": 0.2,
    "affiliation_location": 0.1,
}

TAGGABLE_QUESTIONS = ("Taggable Question 0", "Taggable Question 1")

NEUTRAL_BEHAVIORAL_SCORE = 0.3
INACTIVE_BEHAVIORAL_SCORE = 0.1
FORUM_ACTIVITY_SCORE = 0.4
MAX_POPULARITY_BONUS = 0.4
MAX_ENGAGEMENT_BONUS = 0.2
MIN_SCORE = 0.05
LOW_SCORE_THRESHOLD = 0.1
BASE_SCORE_BLEND = 0.3
UNDERREPRESENTED_RATIO = 0.7
DIVERSITY_BOOST_RATE = 0.3
TOP_USERS_PER_FORUM = 10
TOP_USER_POPULARITY = 3


@dataclass(frozen=True)
class ProfileFeatures:
    """Profile fields compared between two users."""
    user_id: int
    specialization: str = ""
    research_topic: str = ""
    affiliation_location: str = ""
    taggable_answers: tuple[str, ...] = ()


@dataclass(frozen=True)
class ForumInterest:
    """A forum the current user liked posts in."""
    forum_id: int
    title: str
    like_count: int


@dataclass(frozen=True)
class ForumMemberStats:
    post_count: int
    total_likes: int
    total_comments: int

    @property
    def popularity(self) -> float:
        return self.total_likes * 0.7 + self.total_comments * 0.3


@dataclass
class ForumActivity:
    title: str
    all_users: dict[int, ForumMemberStats] = field(default_factory=dict)
    top_users: dict[int, float] = field(default_factory=dict)


@dataclass
class BehavioralData:
    interests: list[ForumInterest] = field(default_factory=list)
    activity: dict[int, ForumActivity] = field(default_factory=dict)


@dataclass
class ScoredCandidate:
    user_id: int
    score: float
    details: dict = field(default_factory=dict)
    forum_contributions: dict[int, float] = field(default_factory=dict)


def extract_taggable_answers(questions: Iterable[tuple[str, str | None]]) -> tuple[str, ...]:
    """Normalized answers to the taggable profile questions."""
    answers = []
    for question, answer in questions:
        if question in TAGGABLE_QUESTIONS and not is_blank(answer) and answer.strip():
            answers.append(answer.strip().lower())
    return tuple(answers)


def build_forum_activity(
    rows: Iterable[tuple[int, str, int, ForumMemberStats]],
) -> dict[int, ForumActivity]:
    """Group (forum_id, title, user_id, stats) rows into per-forum activity.

    Rows are ranked by popularity within each forum before top users are
    picked: the first TOP_USERS_PER_FORUM always qualify, later ones only above
    TOP_USER_POPULARITY.
    """
    ordered = sorted(rows, key=lambda r: (r[0], -r[3].popularity))
    activity: dict[int, ForumActivity] = {}
    for forum_id, title, user_id, stats in ordered:
        forum = activity.setdefault(forum_id, ForumActivity(title=title))
        forum.all_users[user_id] = stats
        if (
            len(forum.top_users) < TOP_USERS_PER_FORUM
            or stats.popularity > TOP_USER_POPULARITY
        ):
            forum.top_users[user_id] = stats.popularity
    return activity


def behavioral_score(
    candidate_id: int, behavioral: BehavioralData,
) -> tuple[float, dict[int, float]]:
    """Score candidate activity in the forums the current user likes.

    Returns (score, per-forum contributions). Neutral 0.3 without likes,
    0.1 when the candidate posts in none of the liked forums.
    """
    total_likes = sum(i.like_count for i in behavioral.interests)
    if not behavioral.interests or total_likes == 0:
        return NEUTRAL_BEHAVIORAL_SCORE, {}

    score = 0.0
    contributions: dict[int, float] = {}
    for interest in behavioral.interests:
        forum = behavioral.activity.get(interest.forum_id)
        if forum is None or candidate_id not in forum.all_users:
            continue
        stats = forum.all_users[candidate_id]
        weight = interest.like_count / total_likes

        popularity_bonus = 0.0
        if candidate_id in forum.top_users:
            popularity_bonus = min(
                MAX_POPULARITY_BONUS, forum.top_users[candidate_id] / 10,
            )
        engagement_bonus = 0.0
        if stats.total_likes > 0 or stats.total_comments > 0:
            engagement_bonus = min(
                MAX_ENGAGEMENT_BONUS,
                stats.total_likes * 0.015 + stats.total_comments * 0.01,
            )

        forum_score = weight * (
            FORUM_ACTIVITY_SCORE + popularity_bonus + engagement_bonus
        )
        contributions[interest.forum_id] = forum_score
        score += forum_score

    if score > 0:
        return min(1.0, score), contributions
    return INACTIVE_BEHAVIORAL_SCORE, contributions


def traditional_score(current: ProfileFeatures, other: ProfileFeatures) -> float:
    """Weighted profile similarity; each term only when both sides are filled."""
    score = 0.0
    if current.specialization and other.specialization:
        score += string_similarity(
            current.specialization, other.specialization,
        ) * SCORE_WEIGHTS["specialization"]
    if current.research_topic and other.research_topic:
        score += string_similarity(
            current.research_topic, other.research_topic,
        ) * SCORE_WEIGHTS["research_topic"]
    if current.affiliation_location and other.affiliation_location:
        score += location_similarity(
            current.affiliation_location, other.affiliation_location,
        ) * SCORE_WEIGHTS["affiliation_location"]
    if current.taggable_answers and other.taggable_answers:
        score += question_similarity(
            list(current.taggable_answers), list(other.taggable_answers),
        ) * SCORE_WEIGHTS["taggable_questions"]
    return score


def base_score(current: ProfileFeatures, other: ProfileFeatures) -> float:
    """Profile-only score used for the guaranteed floor."""
    score = 0.0
    if current.specialization and other.specialization:
        score += string_similarity(
            current.specialization, other.specialization,
        ) * BASE_SCORE_WEIGHTS["specialization"]
    if current.research_topic and other.research_topic:
        score += string_similarity(
            current.research_topic, other.research_topic,
        ) * BASE_SCORE_WEIGHTS["research_topic"]
    if current.affiliation_location and other.affiliation_location:
        score += location_similarity(
            current.affiliation_location, other.affiliation_location,
        ) * BASE_SCORE_WEIGHTS["affiliation_location"]
    return score


def apply_minimum_score(
    candidate: ScoredCandidate, current: ProfileFeatures, other: ProfileFeatures,
) -> None:
    """Raise near-zero scores to a guaranteed floor, blend profile score otherwise."""
    base = base_score(current, other)
    guaranteed = max(MIN_SCORE, base)
    if candidate.score < LOW_SCORE_THRESHOLD:
        candidate.details["original_score"] = candidate.score
        candidate.details["guaranteed_score"] = guaranteed
        candidate.score = guaranteed
    else:
        candidate.details["base_score_added"] = base * BASE_SCORE_BLEND
        candidate.score += base * BASE_SCORE_BLEND
    candidate.score = min(1.0, candidate.score)


def apply_diversity_boost(candidates: list[ScoredCandidate]) -> None:
    """Boost candidates active in forums whose average contribution is low."""
    totals: dict[int, list[float]] = {}
    for candidate in candidates:
        for forum_id, contribution in candidate.forum_contributions.items():
            totals.setdefault(forum_id, []).append(contribution)
    if not totals:
        return
    averages = {fid: sum(v) / len(v) for fid, v in totals.items()}
    global_average = sum(averages.values()) / len(averages)

    for candidate in candidates:
        boost = 0.0
        for forum_id in candidate.forum_contributions:
            forum_average = averages[forum_id]
            if forum_average < global_average * UNDERREPRESENTED_RATIO:
                boost += (global_average - forum_average) * DIVERSITY_BOOST_RATE
        candidate.details["diversity_boost"] = boost
        candidate.score = min(1.0, candidate.score + boost)


def score_candidates(
    current: ProfileFeatures,
    candidates: Iterable[ProfileFeatures],
    friend_ids: Iterable[int],
    behavioral: BehavioralData,
    limit: int | None = None,
) -> list[ScoredCandidate]:
    """Rank candidates for the current user. Pure, no IO."""
    excluded = {current.user_id, *friend_ids}
    scored: list[tuple[ScoredCandidate, ProfileFeatures]] = []

    for other in candidates:
        if other.user_id in excluded:
            continue
        behavior, contributions = behavioral_score(other.user_id, behavioral)
        weighted_behavior = behavior * SCORE_WEIGHTS["behavioral"]
        traditional = traditional_score(current, other)
        candidate = ScoredCandidate(
            user_id=other.user_id,
            score=round(weighted_behavior + traditional, 4),
            details={"behavioral": weighted_behavior, "traditional": traditional},
            forum_contributions=contributions,
        )
        scored.append((candidate, other))

    for candidate, other in scored:
        apply_minimum_score(candidate, current, other)

    ranked = [candidate for candidate, _ in scored]
    apply_diversity_boost(ranked)
    ranked.sort(key=lambda c: c.score, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
