"""User Relations — pure operations on network/blocked ID lists and toggle decisions.

Invariants:
    - ID lists never contain duplicates and only hold ints
    - Every operation returns a NEW list (callers reassign; JSON columns are not
      mutation-tracked, so in-place edits would never reach the database)
    - resolve_network_status never returns CONNECTED for self

Design Decisions:
    - Pure functions over ORM methods: the User model delegates here so the rules
      are testable without a database
"""

from typing import Iterable

from maeutic.core.domain_types import NetworkStatus, ToggleAction


def normalize_ids(ids: Iterable | None) -> list[int]:
    """Coerce to ints and drop duplicates, keeping first-seen order."""
    seen: list[int] = []
    for raw in ids or []:
        value = int(raw)
        if value not in seen:
            seen.append(value)
    return seen


def with_id(ids: list[int] | None, user_id: int) -> list[int]:
    current = normalize_ids(ids)
    if user_id not in current:
        current.append(user_id)
    return current


def without_id(ids: list[int] | None, user_id: int) -> list[int]:
    return [i for i in normalize_ids(ids) if i != user_id]


def is_blocked_between(
    blocked_by_a: list[int] | None, a_id: int,
    blocked_by_b: list[int] | None, b_id: int,
) -> bool:
    """True if a blocked b or b blocked a."""
    return b_id in normalize_ids(blocked_by_a) or a_id in normalize_ids(blocked_by_b)


def resolve_network_status(
    current_id: int,
    target_id: int,
    current_network: list[int] | None,
    has_outgoing_request: bool,
    has_incoming_request: bool,
) -> NetworkStatus:
    """Relationship of current user to target. Outgoing wins over incoming."""
    if current_id == target_id:
        return NetworkStatus.SELF
    if target_id in normalize_ids(current_network):
        return NetworkStatus.CONNECTED
    if has_outgoing_request:
        return NetworkStatus.OUTGOING_REQUEST
    if has_incoming_request:
        return NetworkStatus.INCOMING_REQUEST
    return NetworkStatus.NONE


def decide_toggle(status: NetworkStatus) -> ToggleAction:
    """Map relationship status to the toggle action it triggers."""
    if status == NetworkStatus.SELF:
        raise ValueError("cannot toggle network with self")
    return {
        NetworkStatus.CONNECTED: ToggleAction.REMOVE,
        NetworkStatus.OUTGOING_REQUEST: ToggleAction.CANCEL,
        NetworkStatus.INCOMING_REQUEST: ToggleAction.ACCEPT,
        NetworkStatus.NONE: ToggleAction.REQUEST,
    }[status]
