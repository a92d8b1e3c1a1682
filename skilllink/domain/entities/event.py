"""Mentorship event entity (``events`` collection)."""

from dataclasses import dataclass, field
from datetime import date, datetime

from skilllink.domain.exceptions import ValidationException
from skilllink.shared.utils.datetime import parse_day_month_year


@dataclass(frozen=True)
class Attendee:
    user_id: str
    name: str


@dataclass(frozen=True)
class MentorshipEvent:
    """Event created by a mentor that students can join.

    Validation runs on construction. ``date`` and ``time`` are the free text
    entered in the form; only ``dd/mm/yyyy`` dates take part in tab filtering.
    A capacity of None (older documents) means unlimited.
    """

    id: str
    title: str
    date: str
    time: str
    capacity: int | None
    created_by_id: str
    created_by_name: str = ""
    category: str = ""
    meeting_link: str = ""
    description: str = ""
    attendees: tuple[Attendee, ...] = field(default_factory=tuple)
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate event business rules. Raises ValidationException if invalid."""
        if self.capacity is not None and self.capacity <= 0:
            raise ValidationException("Capacity must be a positive number", field="capacity")

    @property
    def attendee_count(self) -> int:
        return len(self.attendees)

    @property
    def is_full(self) -> bool:
        return self.capacity is not None and self.attendee_count >= self.capacity

    def has_attendee(self, user_id: str) -> bool:
        return any(a.user_id == user_id for a in self.attendees)

    def involves(self, user_id: str) -> bool:
        """Created or joined by user_id ("My Events")."""
        return self.created_by_id == user_id or self.has_attendee(user_id)

    def event_date(self) -> date | None:
        """Parsed event date, or None when the text is not dd/mm/yyyy."""
        return parse_day_month_year(self.date)

    def with_attendee(self, attendee: Attendee) -> "MentorshipEvent":
        """Return a copy with attendee appended."""
        return MentorshipEvent(
            id=self.id,
            title=self.title,
            date=self.date,
            time=self.time,
            capacity=self.capacity,
            created_by_id=self.created_by_id,
            created_by_name=self.created_by_name,
            category=self.category,
            meeting_link=self.meeting_link,
            description=self.description,
            attendees=(*self.attendees, attendee),
            created_at=self.created_at,
        )
