"""User profile entity (``users`` collection, id = auth uid)."""

from dataclasses import dataclass, field
from datetime import datetime

from skilllink.domain.enums import UserRole

DEFAULT_SUBJECT = "General"
FALLBACK_DISPLAY_NAME = "SkillLink user"


def initials_for(name: str) -> str:
    """Avatar text: first letter of the trimmed name, upper-cased."""
    stripped = (name or "").strip()
    return stripped[:1].upper()


@dataclass(frozen=True)
class UserProfile:
    """Public profile of a student or mentor."""

    id: str
    name: str
    role: UserRole
    email: str = ""
    subject: str = DEFAULT_SUBJECT
    avatar: str = ""
    categories: tuple[str, ...] = field(default_factory=tuple)
    created_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return self.name or FALLBACK_DISPLAY_NAME

    @classmethod
    def placeholder(cls, user_id: str) -> "UserProfile":
        """Stand-in for a counterpart whose profile document is missing."""
        return cls(id=user_id, name=FALLBACK_DISPLAY_NAME, role=UserRole.STUDENT)
