"""Connection record and resolved relationship entities.

A record is one directional request between two users as stored in the
``connections`` collection. A resolved relationship is the viewer-relative
reading of those records and is never stored.
"""

from dataclasses import dataclass
from datetime import datetime

from skilllink.domain.enums import RelationshipState, RelationshipStatus
from skilllink.domain.exceptions import InvalidRecordError


@dataclass(frozen=True)
class RelationshipRecord:
    """Connection request between a requester and a receiver.

    Records come from a store snapshot and may be malformed; call
    validate() before trusting requester/receiver ids.
    """

    id: str
    requester_id: str
    receiver_id: str
    status: RelationshipStatus
    created_at: datetime | None

    def validate(self) -> None:
        """Raise InvalidRecordError on missing ids or a self-relationship."""
        if not self.requester_id:
            raise InvalidRecordError("missing requester id", self.id)
        if not self.receiver_id:
            raise InvalidRecordError("missing receiver id", self.id)
        if self.requester_id == self.receiver_id:
            raise InvalidRecordError("requester and receiver are the same user", self.id)

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    def involves(self, user_id: str) -> bool:
        """Return whether user_id is the requester or the receiver."""
        return user_id in (self.requester_id, self.receiver_id)

    def counterpart_of(self, user_id: str) -> str:
        """Return the other party relative to user_id."""
        return self.receiver_id if self.requester_id == user_id else self.requester_id

    def is_between(self, user_a: str, user_b: str) -> bool:
        """Return whether this record links the two users, in either direction."""
        return {self.requester_id, self.receiver_id} == {user_a, user_b}

    def state_for(self, viewing_user_id: str) -> RelationshipState:
        """Map the stored status to the state seen by viewing_user_id."""
        if self.status is RelationshipStatus.ACCEPTED:
            return RelationshipState.ACCEPTED
        if self.status is RelationshipStatus.DECLINED:
            return RelationshipState.DECLINED
        if self.requester_id == viewing_user_id:
            return RelationshipState.PENDING_OUTGOING
        return RelationshipState.PENDING_INCOMING


@dataclass(frozen=True)
class ResolvedRelationship:
    """Relationship with one counterpart, relative to a viewing user."""

    counterpart_id: str
    state: RelationshipState
    record_id: str | None = None

    @classmethod
    def none(cls, counterpart_id: str) -> "ResolvedRelationship":
        """No record links the viewer and counterpart."""
        return cls(counterpart_id=counterpart_id, state=RelationshipState.NONE)

    @property
    def is_active(self) -> bool:
        return self.state in (
            RelationshipState.PENDING_OUTGOING,
            RelationshipState.PENDING_INCOMING,
            RelationshipState.ACCEPTED,
        )
