"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
All types reference domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from skilllink.domain.entities import (
        ChatMessage,
        MentorshipEvent,
        ReflectionEntry,
        RelationshipRecord,
        UserProfile,
    )
    from skilllink.domain.entities.event import Attendee
    from skilllink.domain.enums import RelationshipStatus


class IRelationshipStore(Protocol):
    """Protocol for the connection record store.

    Conditional operations are compare-and-set on the record's status: they
    raise PreconditionFailedError when the stored status is not the
    expected one, including when another writer changed it in between.
    """

    async def list_records_involving(self, user_id: str) -> list[RelationshipRecord]:
        """Return every record where user_id is requester or receiver."""

    async def get_record(self, record_id: str) -> RelationshipRecord | None:
        """Return record by ID."""

    async def create_record(
        self, requester_id: str, receiver_id: str
    ) -> RelationshipRecord:
        """Create a pending record. Raises ConflictError if the pair already has one."""

    async def update_record_status(
        self,
        record_id: str,
        expected_current_status: RelationshipStatus,
        new_status: RelationshipStatus,
    ) -> RelationshipRecord:
        """Conditionally update status; return the stored record."""

    async def delete_record(
        self, record_id: str, expected_current_status: RelationshipStatus
    ) -> None:
        """Conditionally delete a record."""


class IProfileRepository(Protocol):
    """Protocol for user profiles (``users`` collection)."""

    async def get_by_id(self, user_id: str) -> UserProfile | None:
        """Return profile by user ID."""

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, UserProfile]:
        """Return profiles for the given ids; missing ids are omitted."""

    async def list_all(self, limit: int = 500) -> list[UserProfile]:
        """Return all profiles."""

    async def create(self, user_id: str, data: dict[str, Any]) -> UserProfile:
        """Create or overwrite the profile document for user_id."""


class IEventRepository(Protocol):
    """Protocol for mentorship events."""

    async def get_by_id(self, event_id: str) -> MentorshipEvent | None:
        """Return event by ID."""

    async def list_recent(self, limit: int = 200) -> list[MentorshipEvent]:
        """Return events newest first (by createdAt)."""

    async def create(self, data: dict[str, Any]) -> MentorshipEvent:
        """Create an event with a store-assigned id."""

    async def add_attendee(
        self, event: MentorshipEvent, attendee: Attendee
    ) -> MentorshipEvent:
        """Append attendee, conditional on the event being unchanged since it was read."""


class IMessageRepository(Protocol):
    """Protocol for chat messages."""

    async def add(self, conversation_id: str, sender_id: str, text: str) -> ChatMessage:
        """Store a message and return it."""

    async def list_for_conversation(
        self, conversation_id: str, limit: int = 100
    ) -> list[ChatMessage]:
        """Return the newest ``limit`` messages, oldest first."""


class IReflectionRepository(Protocol):
    """Protocol for feedback reflections."""

    async def create(self, user_id: str, data: dict[str, Any]) -> ReflectionEntry:
        """Store a reflection and return it."""

    async def list_for_user(self, user_id: str) -> list[ReflectionEntry]:
        """Return the user's reflections newest first."""
