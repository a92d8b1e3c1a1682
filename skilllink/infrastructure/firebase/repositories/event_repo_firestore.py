"""Firestore-backed event repository (implements IEventRepository)."""

from __future__ import annotations

from typing import Any

from skilllink.domain.entities.event import Attendee, MentorshipEvent
from skilllink.domain.exceptions import PreconditionFailedError, ResourceNotFoundException
from skilllink.infrastructure.firebase._rest_client import (
    DocumentPreconditionError,
    FirestoreRESTClient,
)
from skilllink.infrastructure.firebase.collections import COLLECTION_EVENTS
from skilllink.shared.utils.datetime import ensure_utc


def _to_attendees(raw: Any) -> tuple[Attendee, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        Attendee(user_id=a.get("userId", ""), name=a.get("name", ""))
        for a in raw
        if isinstance(a, dict) and a.get("userId")
    )


def _to_capacity(raw: Any) -> int | None:
    if isinstance(raw, int) and not isinstance(raw, bool) and raw > 0:
        return raw
    return None


def _to_event(doc_id: str, data: dict) -> MentorshipEvent:
    return MentorshipEvent(
        id=doc_id,
        title=data.get("title") or "",
        date=data.get("date") or "",
        time=data.get("time") or "",
        capacity=_to_capacity(data.get("capacity")),
        created_by_id=data.get("createdById") or "",
        created_by_name=data.get("createdByName") or "",
        category=data.get("category") or "",
        meeting_link=data.get("meetingLink") or "",
        description=data.get("description") or "",
        attendees=_to_attendees(data.get("attendees")),
        created_at=ensure_utc(data.get("createdAt")),
    )


def _encode_attendees(attendees: tuple[Attendee, ...]) -> list[dict[str, str]]:
    return [{"userId": a.user_id, "name": a.name} for a in attendees]


class FirestoreEventRepository:
    """Events in the ``events`` collection."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_EVENTS)

    async def get_by_id(self, event_id: str) -> MentorshipEvent | None:
        """Return event by ID."""
        doc = await self._coll.document(event_id).get()
        if not doc:
            return None
        return _to_event(doc.id, doc.to_dict())

    async def list_recent(self, limit: int = 200) -> list[MentorshipEvent]:
        """Return events newest first."""
        q = self._coll.order_by("createdAt", "DESCENDING").limit(limit)
        return [_to_event(s.id, s.to_dict()) async for s in q.stream()]

    async def create(self, data: dict[str, Any]) -> MentorshipEvent:
        """Create an event with a Firestore-assigned id."""
        snapshot = await self._coll.add(data)
        return _to_event(snapshot.id, data)

    async def add_attendee(
        self, event: MentorshipEvent, attendee: Attendee
    ) -> MentorshipEvent:
        """Append attendee if the attendee list still matches ``event``.

        Raises:
            ResourceNotFoundException: If the event was deleted.
            PreconditionFailedError: If someone joined (or the event changed) since it was read.
        """
        ref = self._coll.document(event.id)
        snapshot = await ref.get()
        if snapshot is None:
            raise ResourceNotFoundException("event", event.id)
        current = _to_event(snapshot.id, snapshot.to_dict())
        if current.attendees != event.attendees:
            raise PreconditionFailedError(
                event.id,
                expected=f"{event.attendee_count} attendees",
                actual=f"{current.attendee_count} attendees",
            )
        joined = current.with_attendee(attendee)
        try:
            updated = await ref.update(
                {"attendees": _encode_attendees(joined.attendees)},
                update_time=snapshot.update_time,
            )
        except DocumentPreconditionError:
            raise PreconditionFailedError(event.id) from None
        if updated is None:
            raise ResourceNotFoundException("event", event.id)
        return joined
