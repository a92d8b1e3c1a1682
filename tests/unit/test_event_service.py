"""EventService tests: mentor-only creation, capacity-checked join, tabs."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from skilllink.application.use_cases.events import EventService
from skilllink.domain.enums import EventTab
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
from tests.fakes import InMemoryEventRepository, make_event


def _form(**overrides) -> EventCreateForm:
    data = {
        "title": "Intro to Python",
        "date": "20/02/2025",
        "time": "18:00",
        "category": "Programming",
        "meeting_link": "https://meet.example.com/abc",
        "capacity": "10",
        "description": "Basics",
    }
    data.update(overrides)
    return EventCreateForm(**data)


async def test_create_event_by_mentor(event_service, event_repo) -> None:
    event = await event_service.create_event("carol", _form(capacity=" 12 "))

    assert event.capacity == 12
    assert event.created_by_id == "carol"
    assert event.created_by_name == "Carol"
    assert event.attendees == ()
    assert event_repo.events[event.id] == event


async def test_create_event_by_student_not_authorized(event_service, event_repo) -> None:
    with pytest.raises(NotAuthorizedError):
        await event_service.create_event("alice", _form())

    assert event_repo.events == {}


async def test_create_event_unknown_creator(event_service) -> None:
    with pytest.raises(ResourceNotFoundException):
        await event_service.create_event("nobody", _form())


@pytest.mark.parametrize("field", ["title", "date", "time", "capacity"])
async def test_create_event_required_fields(event_service, field) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await event_service.create_event("carol", _form(**{field: ""}))

    assert exc_info.value.message == "Please add a title, date, time and capacity."
    assert exc_info.value.details == {"field": field}


@pytest.mark.parametrize("capacity", ["0", "-3", "ten", "0.5", "about 10"])
async def test_create_event_bad_capacity(event_service, capacity) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await event_service.create_event("carol", _form(capacity=capacity))

    assert exc_info.value.details == {"field": "capacity"}


@pytest.mark.parametrize("capacity,expected", [("10 people", 10), ("3.5", 3), ("+4", 4)])
async def test_create_event_reads_leading_integer(event_service, capacity, expected) -> None:
    event = await event_service.create_event("carol", _form(capacity=capacity))

    assert event.capacity == expected


async def test_create_event_accepts_integer_capacity(event_service) -> None:
    event = await event_service.create_event("carol", _form(capacity=5))

    assert event.capacity == 5


async def test_join_event_uses_profile_name(profile_repo) -> None:
    repo = InMemoryEventRepository([make_event("ev1", capacity=2)])
    service = EventService(repo, profile_repo)

    joined = await service.join_event("ev1", "alice")

    assert [(a.user_id, a.name) for a in joined.attendees] == [("alice", "Alice")]


async def test_join_event_without_profile_uses_default_name(profile_repo) -> None:
    repo = InMemoryEventRepository([make_event("ev1")])
    service = EventService(repo, profile_repo)

    joined = await service.join_event("ev1", "stranger")

    assert joined.attendees[-1].name == "Student"


async def test_join_event_twice_raises(profile_repo) -> None:
    repo = InMemoryEventRepository([make_event("ev1", attendees=["alice"])])
    service = EventService(repo, profile_repo)

    with pytest.raises(AlreadyJoinedError):
        await service.join_event("ev1", "alice")


async def test_join_full_event_raises(profile_repo) -> None:
    repo = InMemoryEventRepository([make_event("ev1", capacity=1, attendees=["bob"])])
    service = EventService(repo, profile_repo)

    with pytest.raises(EventFullError) as exc_info:
        await service.join_event("ev1", "alice")

    assert exc_info.value.details == {"event_id": "ev1", "capacity": 1}


async def test_join_event_without_capacity_is_unlimited(profile_repo) -> None:
    repo = InMemoryEventRepository([make_event("ev1", capacity=None, attendees=["a", "b", "c"])])
    service = EventService(repo, profile_repo)

    joined = await service.join_event("ev1", "alice")

    assert joined.attendee_count == 4


async def test_join_missing_event_raises(event_service) -> None:
    with pytest.raises(ResourceNotFoundException):
        await event_service.join_event("missing", "alice")


async def test_two_joiners_for_last_place(profile_repo) -> None:
    """Both read the event with one place left; only the first write lands."""
    event = make_event("ev1", capacity=1)
    repo = InMemoryEventRepository([event])
    repo.get_by_id = AsyncMock(return_value=event)
    service = EventService(repo, profile_repo)

    await service.join_event("ev1", "alice")
    with pytest.raises(InvalidStateError) as exc_info:
        await service.join_event("ev1", "bob")

    assert isinstance(exc_info.value.__cause__, PreconditionFailedError)
    assert [a.user_id for a in repo.events["ev1"].attendees] == ["alice"]


async def test_list_events_by_tab(profile_repo) -> None:
    repo = InMemoryEventRepository([
        make_event("past", date="01/01/2025"),
        make_event("soon", date="20/02/2025", attendees=["alice"]),
        make_event("tbd", date="next week"),
    ])
    service = EventService(repo, profile_repo)
    today = date(2025, 2, 1)

    upcoming = await service.list_events(EventTab.UPCOMING, today=today)
    past = await service.list_events(EventTab.PAST, today=today)
    mine = await service.list_events(EventTab.MINE, user_id="alice", today=today)

    assert [e.id for e in upcoming] == ["soon", "tbd"]
    assert [e.id for e in past] == ["past"]
    assert [e.id for e in mine] == ["soon"]
