"""Firestore-backed reflection repository (implements IReflectionRepository)."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from skilllink.domain.entities.reflection import ReflectionEntry
from skilllink.infrastructure.firebase._rest_client import FirestoreRESTClient
from skilllink.infrastructure.firebase.collections import COLLECTION_FEEDBACK
from skilllink.shared.utils.datetime import ensure_utc

_EPOCH = datetime.min.replace(tzinfo=UTC)


def _to_entry(doc_id: str, data: dict) -> ReflectionEntry:
    return ReflectionEntry(
        id=doc_id,
        user_id=data.get("userId", ""),
        date=data.get("date", ""),
        notes=data.get("notes", ""),
        rating=int(data.get("rating") or 0),
        topics=tuple(data.get("topics") or ()),
        created_at=ensure_utc(data.get("createdAt")),
    )


class FirestoreReflectionRepository:
    """Reflections in the ``feedback`` collection."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_FEEDBACK)

    async def create(self, user_id: str, data: dict[str, Any]) -> ReflectionEntry:
        """Store a reflection and return it."""
        snapshot = await self._coll.add({**data, "userId": user_id})
        return _to_entry(snapshot.id, {**data, "userId": user_id})

    async def list_for_user(self, user_id: str) -> list[ReflectionEntry]:
        """Return the user's reflections newest first.

        Sorted client-side: ordering on createdAt alongside the userId filter
        would need a composite index.
        """
        q = self._coll.where("userId", "==", user_id).limit(500)
        entries = [_to_entry(s.id, s.to_dict()) async for s in q.stream()]
        entries.sort(key=lambda e: e.created_at or _EPOCH, reverse=True)
        return entries
