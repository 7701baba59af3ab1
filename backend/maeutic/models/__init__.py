"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Integer primary keys: network/blocked lists on User store these ids

Design Decisions:
    - One file per feature area (accounts, forums, messaging, notifications,
      library, resources)
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (standard SQLAlchemy pattern)
"""

from maeutic.models.user import User, UserQuestion  # noqa: F401
from maeutic.models.forum import Forum, Post, PostLike, Comment, CommentLike  # noqa: F401
from maeutic.models.messaging import Conversation, Message  # noqa: F401
from maeutic.models.notification import Notification  # noqa: F401
from maeutic.models.library import Author, Book, Article  # noqa: F401
from maeutic.models.resource import Resource  # noqa: F401
