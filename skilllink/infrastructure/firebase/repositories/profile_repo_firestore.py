"""Firestore-backed profile repository (implements IProfileRepository)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from skilllink.domain.entities.profile import DEFAULT_SUBJECT, UserProfile, initials_for
from skilllink.domain.enums import UserRole
from skilllink.infrastructure.firebase._rest_client import FirestoreRESTClient
from skilllink.infrastructure.firebase.collections import COLLECTION_USERS
from skilllink.shared.utils.datetime import ensure_utc


def _to_profile(doc_id: str, data: dict) -> UserProfile:
    name = data.get("name") or ""
    return UserProfile(
        id=doc_id,
        name=name,
        role=UserRole.parse(data.get("role")),
        email=data.get("email") or "",
        subject=data.get("subject") or data.get("category") or DEFAULT_SUBJECT,
        avatar=data.get("avatar") or initials_for(name),
        categories=tuple(data.get("categories") or ()),
        created_at=ensure_utc(data.get("createdAt")),
    )


class FirestoreProfileRepository:
    """Profiles in the ``users`` collection (document id = auth uid)."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_USERS)

    async def get_by_id(self, user_id: str) -> UserProfile | None:
        """Return profile by user ID."""
        doc = await self._coll.document(user_id).get()
        if not doc:
            return None
        return _to_profile(doc.id, doc.to_dict())

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, UserProfile]:
        """Return profiles for user_ids in one batchGet; missing ids are omitted."""
        refs = [self._coll.document(uid) for uid in dict.fromkeys(user_ids)]
        snapshots = await self._client.get_all(refs)
        return {s.id: _to_profile(s.id, s.to_dict()) for s in snapshots}

    async def list_all(self, limit: int = 500) -> list[UserProfile]:
        """Return profiles ordered by document id."""
        q = self._coll.order_by("__name__").limit(limit)
        return [_to_profile(s.id, s.to_dict()) async for s in q.stream()]

    async def create(self, user_id: str, data: dict[str, Any]) -> UserProfile:
        """Write the profile document (full replace) and return it."""
        await self._coll.document(user_id).set(data)
        return _to_profile(user_id, data)
