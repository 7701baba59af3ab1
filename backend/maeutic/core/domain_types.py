"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum, IntEnum


# ─── Enums ───────────────────────────────────────────────────────

class UserType(IntEnum):
    """Maps to DB `user_type` column. Admins may edit anyone's posts."""
    MEMBER = 0
    ADMIN = 1


class NotificationType(str, Enum):
    NETWORK_REQUEST = "network_request"


class NotificationStatus(str, Enum):
    """Notification lifecycle — accepted/declined requests are deleted, not kept."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class NetworkStatus(str, Enum):
    """Relationship between the current user and another user."""
    SELF = "self"
    CONNECTED = "connected"
    OUTGOING_REQUEST = "outgoing_request"
    INCOMING_REQUEST = "incoming_request"
    NONE = "none"


class ToggleAction(str, Enum):
    """What a network toggle does, decided from the current NetworkStatus."""
    REMOVE = "removed"
    CANCEL = "cancelled"
    ACCEPT = "accepted"
    REQUEST = "pending"


class ResourcePage(str, Enum):
    """Pages of curated links; only admins edit them."""
    CHILL = "chill"
    METHODOLOGY = "methodology"
    ADMINISTRATIVE = "administrative"
