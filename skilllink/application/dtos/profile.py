"""DTOs for profile browsing."""

from dataclasses import dataclass

from skilllink.domain.entities.profile import UserProfile
from skilllink.domain.enums import RelationshipState


@dataclass(frozen=True)
class ProfileCard:
    """Profile shown in the browse list with the viewer's relationship to it."""

    profile: UserProfile
    state: RelationshipState
    record_id: str | None = None

    @property
    def can_request(self) -> bool:
        """Whether a "Connect" action is allowed (no active record)."""
        return self.state in (RelationshipState.NONE, RelationshipState.DECLINED)
