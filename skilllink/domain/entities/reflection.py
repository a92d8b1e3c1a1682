"""Feedback reflection entity (``feedback`` collection)."""

from dataclasses import dataclass, field
from datetime import datetime

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class ReflectionEntry:
    """A user's note about a mentorship session."""

    id: str
    user_id: str
    date: str
    notes: str
    rating: int
    topics: tuple[str, ...] = field(default_factory=tuple)
    created_at: datetime | None = None
