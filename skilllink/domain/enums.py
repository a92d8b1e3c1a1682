"""Domain enumerations for SkillLink.

Persisted values are lowercase strings, matching the documents written
by the mobile app.
"""

from enum import Enum


class RelationshipStatus(str, Enum):
    """Status stored on a connection record."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"

    @property
    def is_active(self) -> bool:
        """Pending and accepted records count toward the one-per-pair rule."""
        return self is not RelationshipStatus.DECLINED

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class RelationshipState(str, Enum):
    """Relationship as seen by one user (derived, never stored)."""

    NONE = "none"
    PENDING_OUTGOING = "pending_outgoing"
    PENDING_INCOMING = "pending_incoming"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class UserRole(str, Enum):
    """Profile role chosen at registration."""

    STUDENT = "student"
    MENTOR = "mentor"

    @classmethod
    def parse(cls, value: "str | UserRole | None") -> "UserRole":
        """Parse a stored role case-insensitively; missing or unknown reads as student."""
        if isinstance(value, UserRole):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.STUDENT


class ConnectionCategory(str, Enum):
    """Role filter applied to profile and connection lists."""

    ALL = "all"
    STUDENT = "student"
    MENTOR = "mentor"

    def matches(self, role: UserRole | None) -> bool:
        """Return whether a counterpart with this role passes the filter."""
        if self is ConnectionCategory.ALL:
            return True
        return role is not None and role.value == self.value


class EventTab(str, Enum):
    """Event list tabs."""

    UPCOMING = "upcoming"
    MINE = "mine"
    PAST = "past"
