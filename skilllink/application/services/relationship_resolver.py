"""Resolve connection records into one relationship per counterpart.

Pure functions over a snapshot of records: no I/O and no shared state,
so callers may invoke them concurrently on the same snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime

from skilllink.domain.entities.relationship import (
    RelationshipRecord,
    ResolvedRelationship,
)
from skilllink.domain.exceptions import ValidationException
from skilllink.shared.telemetry.tracing import add_span_event

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=UTC)


def _recency_key(record: RelationshipRecord) -> tuple[datetime, str]:
    """Newest first by created_at; record id breaks exact ties."""
    created = record.created_at or _EPOCH
    if created.tzinfo is None:
        created = created.replace(tzinfo=UTC)
    return created, record.id


def _select_record(
    viewing_user_id: str,
    counterpart_id: str,
    records: list[RelationshipRecord],
) -> RelationshipRecord:
    """Pick the record that decides the relationship with one counterpart.

    An active record wins over declined ones. Several active records for
    one pair break the one-active-record rule: the newest wins and the
    anomaly is logged.
    """
    active = [r for r in records if r.is_active]
    if len(active) > 1:
        record_ids = sorted(r.id for r in active)
        logger.warning(
            "Multiple active connection records between %s and %s: %s",
            viewing_user_id,
            counterpart_id,
            record_ids,
        )
        add_span_event(
            "relationship.duplicate_active",
            {
                "viewing_user_id": viewing_user_id,
                "counterpart_id": counterpart_id,
                "record_ids": record_ids,
            },
        )
    return max(active or records, key=_recency_key)


def resolve_relationships(
    viewing_user_id: str,
    records: Iterable[RelationshipRecord],
) -> dict[str, ResolvedRelationship]:
    """Map each counterpart of viewing_user_id to its resolved relationship.

    Args:
        viewing_user_id: User whose perspective states are computed from.
        records: Snapshot of records; records not involving the viewer are ignored.

    Returns:
        Dict keyed by counterpart id, ordered by counterpart id.

    Raises:
        ValidationException: If viewing_user_id is empty.
        InvalidRecordError: If a record involving the viewer is malformed.
    """
    if not viewing_user_id:
        raise ValidationException("Viewing user id is required", field="viewing_user_id")

    by_counterpart: dict[str, list[RelationshipRecord]] = {}
    for record in records:
        if not record.involves(viewing_user_id):
            continue
        record.validate()
        counterpart_id = record.counterpart_of(viewing_user_id)
        by_counterpart.setdefault(counterpart_id, []).append(record)

    resolved: dict[str, ResolvedRelationship] = {}
    for counterpart_id in sorted(by_counterpart):
        record = _select_record(viewing_user_id, counterpart_id, by_counterpart[counterpart_id])
        resolved[counterpart_id] = ResolvedRelationship(
            counterpart_id=counterpart_id,
            state=record.state_for(viewing_user_id),
            record_id=record.id,
        )
    return resolved


def state_for(
    resolved: Mapping[str, ResolvedRelationship], counterpart_id: str
) -> ResolvedRelationship:
    """Return the resolved entry for counterpart_id, or a ``none`` entry."""
    return resolved.get(counterpart_id) or ResolvedRelationship.none(counterpart_id)
