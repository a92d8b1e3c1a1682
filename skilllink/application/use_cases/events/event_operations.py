"""Event operations: create (mentors), join (capacity-checked), list by tab."""

from __future__ import annotations

import logging
import re
from datetime import date

from skilllink.application.interfaces.repositories import (
    IEventRepository,
    IProfileRepository,
)
from skilllink.application.services.event_filters import filter_events_for_tab
from skilllink.domain.entities.event import Attendee, MentorshipEvent
from skilllink.domain.enums import EventTab, UserRole
from skilllink.domain.exceptions import (
    AlreadyJoinedError,
    EventFullError,
    InvalidStateError,
    NotAuthorizedError,
    PreconditionFailedError,
    ResourceNotFoundException,
    ValidationException,
)
from skilllink.schemas.forms import EventCreateForm
from skilllink.shared.telemetry.tracing import traced
from skilllink.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

DEFAULT_ATTENDEE_NAME = "Student"


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_capacity(text: str) -> int:
    """Read the leading integer of the capacity field ("10 people" is 10, "3.5" is 3)."""
    match = _LEADING_INT.match(text)
    capacity = int(match.group(1)) if match else 0
    if capacity <= 0:
        raise ValidationException("Capacity must be a positive number.", field="capacity")
    return capacity


class EventService:
    """Mentorship events."""

    def __init__(
        self,
        event_repo: IEventRepository,
        profile_repo: IProfileRepository,
    ) -> None:
        self.event_repo = event_repo
        self.profile_repo = profile_repo

    @traced("events.create")
    async def create_event(
        self, creator_id: str, form: EventCreateForm
    ) -> MentorshipEvent:
        """Create an event. Only mentors may create events.

        Raises:
            ResourceNotFoundException: If the creator has no profile.
            NotAuthorizedError: If the creator is not a mentor.
            ValidationException: On missing fields or a non-positive capacity.
        """
        creator = await self.profile_repo.get_by_id(creator_id)
        if creator is None:
            raise ResourceNotFoundException("profile", creator_id)
        if creator.role is not UserRole.MENTOR:
            raise NotAuthorizedError(
                "create_event", creator_id, message="Only mentors can create events"
            )
        for field_name in ("title", "date", "time", "capacity"):
            if not getattr(form, field_name):
                raise ValidationException(
                    "Please add a title, date, time and capacity.", field=field_name
                )
        capacity = _parse_capacity(form.capacity)

        event = await self.event_repo.create({
            "title": form.title,
            "date": form.date,
            "time": form.time,
            "category": form.category,
            "meetingLink": form.meeting_link,
            "capacity": capacity,
            "description": form.description,
            "createdById": creator_id,
            "createdByName": creator.name,
            "attendees": [],
            "createdAt": utc_now(),
        })
        logger.info("Event %s created by %s", event.id, creator_id)
        return event

    @traced("events.join")
    async def join_event(self, event_id: str, user_id: str) -> MentorshipEvent:
        """Add user_id to the event's attendees.

        The write is conditional on the event being unchanged since it was
        read, so two students cannot both take the last place.

        Raises:
            ResourceNotFoundException: If the event does not exist.
            AlreadyJoinedError: If the user already attends.
            EventFullError: If the event is at capacity.
            InvalidStateError: If the event changed while joining.
        """
        event = await self.event_repo.get_by_id(event_id)
        if event is None:
            raise ResourceNotFoundException("event", event_id)
        if event.has_attendee(user_id):
            raise AlreadyJoinedError(event_id, user_id)
        if event.is_full:
            raise EventFullError(event_id, event.capacity)

        profile = await self.profile_repo.get_by_id(user_id)
        attendee = Attendee(
            user_id=user_id,
            name=(profile.name if profile and profile.name else DEFAULT_ATTENDEE_NAME),
        )
        try:
            joined = await self.event_repo.add_attendee(event, attendee)
        except PreconditionFailedError as exc:
            raise InvalidStateError(
                event_id,
                "join",
                None,
                message="The event changed while joining; reload and try again",
            ) from exc
        logger.info("User %s joined event %s", user_id, event_id)
        return joined

    async def list_events(
        self,
        tab: EventTab = EventTab.UPCOMING,
        user_id: str | None = None,
        today: date | None = None,
    ) -> list[MentorshipEvent]:
        """Return events for a tab, newest first."""
        events = await self.event_repo.list_recent()
        return filter_events_for_tab(events, tab, user_id, today or utc_now().date())
