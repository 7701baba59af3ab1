"""Presenters — ORM objects to the camelCase JSON payloads the frontend reads.

Invariants:
    - Pure functions: no DB access, only already-loaded attributes (selectin relations)
    - Message dates are "dd/mm/YYYY HH:MM"; profile activity dates are
      "YYYY-mm-dd HH:MM:SS"; other timestamps ISO 8601
    - Library images fall back to the default pictures, never None
    - A missing author (deleted user, SET NULL) is rendered as None, never raises
"""

from datetime import datetime

from maeutic.models.forum import Comment, Forum, Post
from maeutic.models.library import Article, Author, Book
from maeutic.models.messaging import Message
from maeutic.models.notification import Notification
from maeutic.models.resource import Resource
from maeutic.models.user import User

MESSAGE_DATE_FORMAT = "%d/%m/%Y %H:%M"
ACTIVITY_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_AUTHOR_IMAGE = "/images/default-author.png"
DEFAULT_BOOK_IMAGE = "/images/default-book.png"


def format_message_date(value: datetime | None) -> str | None:
    return value.strftime(MESSAGE_DATE_FORMAT) if value else None


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def user_summary(user: User | None) -> dict | None:
    if user is None:
        return None
    return {
        "id": user.id,
        "username": user.username,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "profileImage": user.profile_image_url,
    }


def user_profile(user: User) -> dict:
    return {
        **user_summary(user),
        "email": user.email,
        "genre": user.genre,
        "affiliationLocation": user.affiliation_location,
        "specialization": user.specialization,
        "researchTopic": user.research_topic,
        "userType": user.user_type,
        "network": user.network_ids(),
        "questions": [
            {"question": q.question, "answer": q.answer} for q in user.questions
        ],
    }


def message_payload(message: Message, current_user_id: int | None = None) -> dict:
    return {
        "id": message.id,
        "content": message.content,
        "sender": user_summary(message.sender),
        "sentAt": format_message_date(message.sent_at),
        "isOwn": current_user_id is not None and message.sender_id == current_user_id,
    }


def notification_payload(notification: Notification) -> dict:
    return {
        "id": notification.id,
        "type": notification.type,
        "data": notification.data or {},
        "status": notification.status,
        "isRead": notification.is_read,
        "createdAt": _iso(notification.created_at),
        "sender": user_summary(notification.sender),
    }


def forum_payload(forum: Forum) -> dict:
    return {
        "id": forum.id,
        "title": forum.title,
        "body": forum.body,
        "anonymous": forum.anonymous,
        "special": forum.special,
        "lastActivity": _iso(forum.last_activity),
    }


def post_payload(post: Post, current_user: User | None = None) -> dict:
    return {
        "id": post.id,
        "name": post.name,
        "description": post.description,
        "forumId": post.forum_id,
        "forum": post.forum.title if post.forum else None,
        "parentId": post.parent_post_id,
        "isReply": post.is_reply,
        "user": user_summary(post.user),
        "creationDate": _iso(post.creation_date),
        "lastActivity": _iso(post.last_activity),
        "likesCount": len(post.likes),
        "commentsCount": len(post.comments),
        "isLiked": current_user is not None
        and any(like.user_id == current_user.id for like in post.likes),
    }


def comment_payload(comment: Comment, current_user: User | None = None) -> dict:
    return {
        "id": comment.id,
        "body": comment.body,
        "postId": comment.post_id,
        "user": user_summary(comment.user),
        "creationDate": _iso(comment.creation_date),
        "likesCount": len(comment.likes),
        "isLiked": current_user is not None
        and any(like.user_id == current_user.id for like in comment.likes),
    }


def user_post_entry(post: Post) -> dict:
    return {
        "id": post.id,
        "title": post.name,
        "category": post.forum.title if post.forum else None,
        "forumId": post.forum_id,
        "creationDate": post.creation_date.strftime(ACTIVITY_DATE_FORMAT),
    }


def user_comment_entry(comment: Comment) -> dict:
    post = comment.post
    return {
        "id": comment.id,
        "body": comment.body,
        "creationDate": comment.creation_date.strftime(ACTIVITY_DATE_FORMAT),
        "postId": post.id,
        "postTitle": post.name,
        "forum": post.forum.title if post.forum else None,
        "forumId": post.forum_id,
    }


def author_payload(author: Author) -> dict:
    return {
        "id": author.id,
        "name": author.name,
        "birthYear": author.birth_year,
        "deathYear": author.death_year,
        "nationality": author.nationality,
        "link": author.link,
        "image": f"/author_images/{author.image}" if author.image else DEFAULT_AUTHOR_IMAGE,
        "userId": author.user_id,
        "userType": author.user.user_type if author.user else None,
    }


def book_payload(book: Book) -> dict:
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "link": book.link,
        "image": book.image or DEFAULT_BOOK_IMAGE,
        "userId": book.user_id,
    }


def article_payload(article: Article) -> dict:
    return {
        "id": article.id,
        "title": article.title,
        "author": article.author,
        "link": article.link,
        "userId": article.user_id,
    }


def resource_payload(resource: Resource) -> dict:
    return {
        "id": resource.id,
        "title": resource.title,
        "description": resource.description,
        "link": resource.link,
        "page": resource.page,
    }
