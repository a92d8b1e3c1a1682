"""Firestore-backed connection record store (implements IRelationshipStore).

Status changes are compare-and-set: the record is read with its
``updateTime``, its status is checked, and the write carries that
``updateTime`` as a precondition. When pair uniqueness is enforced, every
active record has a guard document in ``connection_pairs`` written in the
same atomic commit, so Firestore rejects a second active record for a pair
even if two clients race.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace

from skilllink.domain.entities.relationship import RelationshipRecord
from skilllink.domain.enums import RelationshipStatus
from skilllink.domain.exceptions import (
    ConflictError,
    InvalidRecordError,
    PreconditionFailedError,
    ResourceNotFoundException,
)
from skilllink.infrastructure.firebase._rest_client import (
    DocumentExistsError,
    DocumentPreconditionError,
    DocumentSnapshot,
    FirestoreRESTClient,
)
from skilllink.infrastructure.firebase.collections import (
    COLLECTION_CONNECTION_PAIRS,
    COLLECTION_CONNECTIONS,
)
from skilllink.shared.utils.datetime import ensure_utc, utc_now
from skilllink.shared.utils.generators import generate_cuid, pair_key

logger = logging.getLogger(__name__)

# Per side of the OR query; a user with more records than this is not expected.
_MAX_RECORDS_PER_SIDE = 1000


def _to_record(doc_id: str, data: dict) -> RelationshipRecord:
    """Build a record from document fields; unknown status raises InvalidRecordError."""
    raw_status = data.get("status")
    try:
        status = RelationshipStatus(raw_status)
    except ValueError:
        raise InvalidRecordError(f"unknown status {raw_status!r}", doc_id) from None
    return RelationshipRecord(
        id=doc_id,
        requester_id=data.get("requesterId") or "",
        receiver_id=data.get("receiverId") or "",
        status=status,
        created_at=ensure_utc(data.get("createdAt")),
    )


class FirestoreRelationshipStore:
    """Connection records in the ``connections`` collection."""

    def __init__(
        self,
        client: FirestoreRESTClient,
        *,
        enforce_pair_uniqueness: bool = True,
    ) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_CONNECTIONS)
        self._pairs = client.collection(COLLECTION_CONNECTION_PAIRS)
        self._enforce_pairs = enforce_pair_uniqueness

    async def _query_side(self, field: str, user_id: str) -> list[DocumentSnapshot]:
        q = self._coll.where(field, "==", user_id).limit(_MAX_RECORDS_PER_SIDE)
        return [snapshot async for snapshot in q.stream()]

    async def list_records_involving(self, user_id: str) -> list[RelationshipRecord]:
        """Return records where user_id is requester or receiver.

        Firestore has no OR across fields, so both sides are queried
        concurrently and merged by document id.
        """
        as_requester, as_receiver = await asyncio.gather(
            self._query_side("requesterId", user_id),
            self._query_side("receiverId", user_id),
        )
        by_id = {s.id: s for s in [*as_requester, *as_receiver]}
        return [_to_record(doc_id, s.to_dict()) for doc_id, s in by_id.items()]

    async def get_record(self, record_id: str) -> RelationshipRecord | None:
        """Return record by ID."""
        snapshot = await self._coll.document(record_id).get()
        if snapshot is None:
            return None
        return _to_record(snapshot.id, snapshot.to_dict())

    async def create_record(
        self, requester_id: str, receiver_id: str
    ) -> RelationshipRecord:
        """Create a pending record; raise ConflictError if the pair guard exists."""
        now = utc_now()
        data = {
            "requesterId": requester_id,
            "receiverId": receiver_id,
            "status": RelationshipStatus.PENDING.value,
            "createdAt": now,
        }
        if self._enforce_pairs:
            record_id = generate_cuid()
            key = pair_key(requester_id, receiver_id)
            batch = (
                self._client.batch()
                .create(self._coll.document(record_id), data)
                .create(self._pairs.document(key), {"recordId": record_id, "createdAt": now})
            )
            try:
                await batch.commit()
            except DocumentExistsError:
                raise ConflictError(key) from None
        else:
            record_id = (await self._coll.add(data)).id
        return RelationshipRecord(
            id=record_id,
            requester_id=requester_id,
            receiver_id=receiver_id,
            status=RelationshipStatus.PENDING,
            created_at=now,
        )

    async def _read_expecting(
        self, record_id: str, expected: RelationshipStatus
    ) -> tuple[DocumentSnapshot, RelationshipRecord]:
        snapshot = await self._coll.document(record_id).get()
        if snapshot is None:
            raise ResourceNotFoundException("connection", record_id)
        record = _to_record(snapshot.id, snapshot.to_dict())
        if record.status is not expected:
            raise PreconditionFailedError(record_id, expected.value, record.status.value)
        return snapshot, record

    async def update_record_status(
        self,
        record_id: str,
        expected_current_status: RelationshipStatus,
        new_status: RelationshipStatus,
    ) -> RelationshipRecord:
        """Set status only if it is still expected_current_status; return the stored record."""
        snapshot, record = await self._read_expecting(record_id, expected_current_status)
        ref = self._coll.document(record_id)
        updates = {"status": new_status.value, "updatedAt": utc_now()}
        releases_pair = expected_current_status.is_active and not new_status.is_active
        try:
            if self._enforce_pairs and releases_pair:
                await (
                    self._client.batch()
                    .update(ref, updates, update_time=snapshot.update_time)
                    .delete(self._pairs.document(pair_key(record.requester_id, record.receiver_id)))
                    .commit()
                )
            elif await ref.update(updates, update_time=snapshot.update_time) is None:
                raise PreconditionFailedError(record_id, expected_current_status.value)
        except DocumentPreconditionError:
            raise PreconditionFailedError(record_id, expected_current_status.value) from None
        return replace(record, status=new_status)

    async def delete_record(
        self, record_id: str, expected_current_status: RelationshipStatus
    ) -> None:
        """Delete the record only if its status is still expected_current_status."""
        snapshot, record = await self._read_expecting(record_id, expected_current_status)
        ref = self._coll.document(record_id)
        try:
            if self._enforce_pairs and expected_current_status.is_active:
                await (
                    self._client.batch()
                    .delete(ref, update_time=snapshot.update_time)
                    .delete(self._pairs.document(pair_key(record.requester_id, record.receiver_id)))
                    .commit()
                )
            else:
                await ref.delete(update_time=snapshot.update_time)
        except DocumentPreconditionError:
            raise PreconditionFailedError(record_id, expected_current_status.value) from None
        logger.debug("Deleted connection record %s", record_id)
