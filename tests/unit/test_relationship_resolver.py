"""Tests for resolve_relationships (pure, snapshot in / mapping out)."""

import logging
import random

import pytest

from skilllink.application.services.relationship_resolver import (
    resolve_relationships,
    state_for,
)
from skilllink.domain.entities.relationship import RelationshipRecord
from skilllink.domain.enums import RelationshipState, RelationshipStatus
from skilllink.domain.exceptions import InvalidRecordError, ValidationException
from tests.fakes import BASE_TIME, make_record

PENDING = RelationshipStatus.PENDING
ACCEPTED = RelationshipStatus.ACCEPTED
DECLINED = RelationshipStatus.DECLINED


def test_states_are_relative_to_viewer() -> None:
    """Pending splits into outgoing/incoming by direction; accepted and declined are symmetric."""
    records = [
        make_record("r1", "alice", "bob", PENDING),
        make_record("r2", "carol", "alice", PENDING),
        make_record("r3", "alice", "dave", ACCEPTED),
        make_record("r4", "erin", "alice", DECLINED),
    ]

    resolved = resolve_relationships("alice", records)

    assert {cid: r.state for cid, r in resolved.items()} == {
        "bob": RelationshipState.PENDING_OUTGOING,
        "carol": RelationshipState.PENDING_INCOMING,
        "dave": RelationshipState.ACCEPTED,
        "erin": RelationshipState.DECLINED,
    }
    assert resolved["bob"].record_id == "r1"


def test_same_record_from_both_sides() -> None:
    """A pending request is outgoing for the requester and incoming for the receiver."""
    records = [make_record("r1", "alice", "bob", PENDING)]

    assert resolve_relationships("alice", records)["bob"].state is RelationshipState.PENDING_OUTGOING
    assert resolve_relationships("bob", records)["alice"].state is RelationshipState.PENDING_INCOMING


def test_records_not_involving_viewer_are_ignored() -> None:
    records = [
        make_record("r1", "bob", "carol", ACCEPTED),
        RelationshipRecord("bad", "bob", "bob", PENDING, BASE_TIME),
    ]

    assert resolve_relationships("alice", records) == {}


def test_empty_snapshot_resolves_to_empty_mapping() -> None:
    assert resolve_relationships("alice", []) == {}


def test_output_is_ordered_by_counterpart_and_independent_of_input_order() -> None:
    """Shuffled snapshots resolve to the same mapping in the same key order."""
    records = [
        make_record("r1", "alice", "zed", PENDING),
        make_record("r2", "bob", "alice", ACCEPTED),
        make_record("r3", "alice", "mia", DECLINED, minutes=1),
        make_record("r4", "mia", "alice", DECLINED, minutes=2),
    ]
    expected = resolve_relationships("alice", records)

    for seed in range(5):
        shuffled = records[:]
        random.Random(seed).shuffle(shuffled)
        result = resolve_relationships("alice", shuffled)
        assert result == expected
        assert list(result) == ["bob", "mia", "zed"]


def test_active_record_wins_over_newer_declined() -> None:
    records = [
        make_record("old", "alice", "bob", PENDING, minutes=0),
        make_record("new", "bob", "alice", DECLINED, minutes=10),
    ]

    resolved = resolve_relationships("alice", records)["bob"]

    assert resolved.state is RelationshipState.PENDING_OUTGOING
    assert resolved.record_id == "old"


def test_newest_declined_wins_when_only_declined() -> None:
    records = [
        make_record("d1", "alice", "bob", DECLINED, minutes=0),
        make_record("d2", "alice", "bob", DECLINED, minutes=5),
    ]

    assert resolve_relationships("alice", records)["bob"].record_id == "d2"


def test_duplicate_active_records_pick_newest_and_warn(caplog) -> None:
    """Two active records for one pair: newest wins and a warning names both ids."""
    records = [
        make_record("a1", "alice", "bob", PENDING, minutes=0),
        make_record("a2", "bob", "alice", ACCEPTED, minutes=3),
    ]

    with caplog.at_level(logging.WARNING):
        resolved = resolve_relationships("alice", records)

    assert resolved["bob"].record_id == "a2"
    assert resolved["bob"].state is RelationshipState.ACCEPTED
    assert "Multiple active connection records" in caplog.text
    assert "a1" in caplog.text and "a2" in caplog.text


def test_created_at_tie_breaks_on_record_id() -> None:
    records = [
        make_record("b", "alice", "bob", PENDING),
        make_record("a", "bob", "alice", PENDING),
    ]

    assert resolve_relationships("alice", records)["bob"].record_id == "b"
    assert resolve_relationships("alice", list(reversed(records)))["bob"].record_id == "b"


def test_missing_created_at_sorts_oldest() -> None:
    records = [
        RelationshipRecord("undated", "alice", "bob", DECLINED, None),
        make_record("dated", "alice", "bob", DECLINED),
    ]

    assert resolve_relationships("alice", records)["bob"].record_id == "dated"


def test_self_relationship_raises_invalid_record() -> None:
    records = [RelationshipRecord("r1", "alice", "alice", PENDING, BASE_TIME)]

    with pytest.raises(InvalidRecordError) as exc_info:
        resolve_relationships("alice", records)

    assert exc_info.value.error_code == "INVALID_RECORD"
    assert exc_info.value.details["record_id"] == "r1"


def test_missing_counterpart_id_raises_invalid_record() -> None:
    records = [RelationshipRecord("r1", "alice", "", PENDING, BASE_TIME)]

    with pytest.raises(InvalidRecordError):
        resolve_relationships("alice", records)


def test_empty_viewer_raises_validation() -> None:
    with pytest.raises(ValidationException) as exc_info:
        resolve_relationships("", [])

    assert exc_info.value.details == {"field": "viewing_user_id"}


def test_state_for_unknown_counterpart_is_none() -> None:
    entry = state_for({}, "bob")

    assert entry.state is RelationshipState.NONE
    assert entry.record_id is None
    assert not entry.is_active
