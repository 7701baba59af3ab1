"""User Relations — verifies ID-list operations and network status decisions.

Tests:
    - ID lists are normalized to unique ints and never mutated in place
    - Status resolution order: self, connected, outgoing, incoming, none
    - Toggle action per status; self toggle rejected
"""

import pytest

from maeutic.core.domain_types import NetworkStatus, ToggleAction
from maeutic.core.relations import (
    normalize_ids, with_id, without_id, is_blocked_between,
    resolve_network_status, decide_toggle,
)


def test_normalize_ids_coerces_and_dedupes():
    assert normalize_ids(["3", 3, 1, "1"]) == [3, 1]
    assert normalize_ids(None) == []


def test_with_id_is_idempotent_and_returns_new_list():
    ids = [1, 2]
    result = with_id(ids, 2)
    assert result == [1, 2]
    assert result is not ids
    assert with_id(ids, 5) == [1, 2, 5]
    assert ids == [1, 2]


def test_without_id_removes_every_occurrence():
    assert without_id([4, "4", 5], 4) == [5]
    assert without_id(None, 4) == []


def test_is_blocked_between_checks_both_directions():
    assert is_blocked_between([2], 1, [], 2)
    assert is_blocked_between([], 1, [1], 2)
    assert not is_blocked_between([3], 1, [4], 2)


def test_status_self():
    assert resolve_network_status(1, 1, [1], True, True) == NetworkStatus.SELF


def test_status_connected_wins_over_requests():
    assert resolve_network_status(1, 2, [2], True, True) == NetworkStatus.CONNECTED


def test_status_outgoing_wins_over_incoming():
    assert resolve_network_status(1, 2, [], True, True) == NetworkStatus.OUTGOING_REQUEST


def test_status_incoming_and_none():
    assert resolve_network_status(1, 2, [], False, True) == NetworkStatus.INCOMING_REQUEST
    assert resolve_network_status(1, 2, None, False, False) == NetworkStatus.NONE


@pytest.mark.parametrize("status,action", [
    (NetworkStatus.CONNECTED, ToggleAction.REMOVE),
    (NetworkStatus.OUTGOING_REQUEST, ToggleAction.CANCEL),
    (NetworkStatus.INCOMING_REQUEST, ToggleAction.ACCEPT),
    (NetworkStatus.NONE, ToggleAction.REQUEST),
])
def test_decide_toggle(status, action):
    assert decide_toggle(status) == action


def test_decide_toggle_rejects_self():
    with pytest.raises(ValueError):
        decide_toggle(NetworkStatus.SELF)
