"""Account Service — registration, login, profiles and account deletion.

Invariants:
    - Email and username are unique; duplicates raise ConflictError before insert
    - Passwords stored only as bcrypt hashes
    - Taggable answers stored as "Taggable Question <index>" rows (read by the recommender),
      free answers as "Question <index>"
    - Deleting an account leaves no trace of its id in other users' network/block
      lists, and applies the foreign-key actions explicitly (posts, likes,
      conversations and received notifications go; authored comments, library
      entries, sent messages and sent notifications stay anonymous)

Design Decisions:
    - Wrong username and wrong password produce the same error: no account enumeration
"""

import logging

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from maeutic.core.errors import (
    ConflictError, NotAuthenticatedError, ResourceNotFoundError,
)
from maeutic.infrastructure.security import hash_password, verify_password
from maeutic.models.forum import Comment, CommentLike, Post, PostLike
from maeutic.models.library import Article, Author, Book
from maeutic.models.messaging import Conversation, Message
from maeutic.models.notification import Notification
from maeutic.models.resource import Resource
from maeutic.models.user import User, UserQuestion
from maeutic.schemas.account import RegisterRequest, ProfileUpdate

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "first_name", "last_name", "genre", "affiliation_location",
    "specialization", "research_topic",
)

QUESTION_LABELS = {
    "Question 0": "Why does this research topic interest you?",
    "Question 1": "Why did you want to become a researcher?",
    "Question 2": "What do you enjoy about research?",
    "Question 3": "Which research problems are you interested in?",
    "Question 4": "Which research methods do you use in your field?",
    "Question 5": "What do you think led you to research?",
    "Question 6": "How would you describe yourself as a researcher?",
    "Question 7": "Do you think this choice is linked to an event in your life?",
    "Question 8": "What motivated the choice of your research topics?",
    "Question 9": (
        "How have your personal experiences shaped your career choice and your "
        "research in the humanities and social sciences?"
    ),
    "Question 10": "In a few words, what drives you as a researcher?",
    "Question 11": "If you had to pick 4 authors who left a mark on you, who would they be?",
    "Question 12": "Which sentence or quote represents you best?",
}

TAGGABLE_LABELS = {
    "Taggable Question 0": "Which keywords relate to your current project?",
    "Taggable Question 1": "Which 5 words would you use to define yourself as a researcher?",
}

# rows whose user_id is kept as NULL when their author deletes the account
CONTRIBUTED_MODELS = (Comment, Author, Book, Article, Resource)


async def get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if not user:
        raise ResourceNotFoundError("User", str(user_id))
    return user


class AccountService:
    """Account lifecycle operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_username_or_404(self, username: str) -> User:
        user = await self.find_by_username(username)
        if not user:
            raise ResourceNotFoundError("User", username)
        return user

    async def register(self, body: RegisterRequest) -> User:
        if await self.find_by_email(body.email):
            raise ConflictError("Email already exists", "email")
        if await self.find_by_username(body.username):
            raise ConflictError("Username already exists", "username")

        user = User(
            email=body.email,
            username=body.username,
            password=hash_password(body.password),
            **{f: getattr(body, f) for f in PROFILE_FIELDS if getattr(body, f) is not None},
        )
        user.questions = self._build_questions(body)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info("User registered", extra={"user_id": user.id})
        return user

    def _build_questions(self, body: RegisterRequest) -> list[UserQuestion]:
        questions = []
        for index, answer in (body.user_questions or {}).items():
            if answer and answer.strip():
                questions.append(UserQuestion(question=f"Question {index}", answer=answer))
        for index, tags in (body.taggable_questions or {}).items():
            for tag in tags:
                if tag and tag.strip():
                    questions.append(
                        UserQuestion(question=f"Taggable Question {index}", answer=tag.strip()),
                    )
        return questions

    async def authenticate(self, username: str, password: str) -> User:
        user = await self.find_by_username(username)
        if not user or not verify_password(password, user.password):
            raise NotAuthenticatedError("Invalid credentials")
        return user

    async def update_profile(self, user: User, body: ProfileUpdate) -> User:
        for field in PROFILE_FIELDS:
            value = getattr(body, field)
            if value is not None:
                setattr(user, field, value)
        await self.db.commit()
        return user

    # --- profile activity ---

    async def overview(self, username: str) -> dict:
        """Answered questions (first answer each) and tags grouped by question."""
        user = await self.get_by_username_or_404(username)
        questions: dict[str, dict] = {}
        tags: dict[str, dict] = {}
        for row in sorted(user.questions, key=lambda q: q.id):
            if row.question.startswith("Taggable Question"):
                group = tags.setdefault(row.question, {
                    "label": TAGGABLE_LABELS.get(row.question, row.question),
                    "tags": [],
                })
                group["tags"].append(row.answer)
            elif row.question not in questions:
                questions[row.question] = {
                    "label": QUESTION_LABELS.get(row.question, row.question),
                    "answer": row.answer,
                }
        return {"questions": list(questions.values()), "tags": list(tags.values())}

    async def posts_by(self, username: str) -> list[Post]:
        user = await self.get_by_username_or_404(username)
        result = await self.db.execute(
            select(Post)
            .where(Post.user_id == user.id)
            .order_by(Post.creation_date.desc(), Post.id.desc())
        )
        return list(result.scalars().all())

    async def comments_by(self, username: str) -> list[Comment]:
        user = await self.get_by_username_or_404(username)
        result = await self.db.execute(
            select(Comment)
            .where(Comment.user_id == user.id)
            .order_by(Comment.creation_date.desc(), Comment.id.desc())
        )
        return list(result.scalars().all())

    # --- deletion ---

    async def delete_account(self, user: User) -> None:
        user_id = user.id

        posts = (await self.db.execute(select(Post).where(Post.user_id == user_id))).scalars().all()
        post_ids = [p.id for p in posts]
        replies = []
        if post_ids:
            # replies first: the parent_post_id cascade is not mapped as a relationship
            replies = (await self.db.execute(
                select(Post).where(Post.parent_post_id.in_(post_ids))
            )).scalars().all()
        for reply in replies:
            await self.db.delete(reply)
        await self.db.flush()
        reply_ids = {r.id for r in replies}
        for post in posts:
            if post.id not in reply_ids:
                await self.db.delete(post)

        conversations = (await self.db.execute(
            select(Conversation).where(
                or_(Conversation.user1_id == user_id, Conversation.user2_id == user_id),
            )
        )).scalars().all()
        for conversation in conversations:
            await self.db.delete(conversation)
        await self.db.flush()

        await self.db.execute(delete(PostLike).where(PostLike.user_id == user_id))
        await self.db.execute(delete(CommentLike).where(CommentLike.user_id == user_id))
        await self.db.execute(delete(Notification).where(Notification.recipient_id == user_id))
        await self.db.execute(
            update(Notification).where(Notification.sender_id == user_id).values(sender_id=None)
        )
        await self.db.execute(
            update(Message).where(Message.sender_id == user_id).values(sender_id=None)
        )
        for model in CONTRIBUTED_MODELS:
            await self.db.execute(
                update(model).where(model.user_id == user_id).values(user_id=None)
            )

        others = (await self.db.execute(select(User).where(User.id != user_id))).scalars().all()
        for other in others:
            other.forget(user_id)

        await self.db.delete(user)
        await self.db.commit()
        logger.info("Account deleted", extra={"user_id": user_id})
