"""ReflectionService tests."""

import pytest

from skilllink.application.use_cases.reflections import REFLECTION_POINTS, ReflectionService
from skilllink.domain.exceptions import ValidationException
from skilllink.schemas.forms import ReflectionForm


async def test_save_reflection_awards_points(reflection_service, reflection_repo) -> None:
    form = ReflectionForm(
        session_date="12/03/2025",
        topics=" recursion, , testing ,",
        reflection="  Learned <i>a lot</i> ",
        rating=4,
    )

    saved = await reflection_service.save_reflection("alice", form)

    assert saved.points_earned == REFLECTION_POINTS == 20
    assert saved.entry.topics == ("recursion", "testing")
    assert saved.entry.notes == "Learned a lot"
    assert saved.entry.rating == 4
    assert reflection_repo.entries == [saved.entry]


async def test_save_reflection_keeps_literal_characters(reflection_service) -> None:
    form = ReflectionForm(
        session_date="12/03/2025", topics="Q&A", reflection="R&D talk, x < 3", rating=5
    )

    saved = await reflection_service.save_reflection("alice", form)

    assert saved.entry.notes == "R&D talk, x < 3"
    assert saved.entry.topics == ("Q&A",)


def test_save_reflection_is_traced() -> None:
    assert ReflectionService.save_reflection.__wrapped__.__name__ == "save_reflection"


@pytest.mark.parametrize(
    "data,field",
    [
        ({"session_date": "", "reflection": "ok", "rating": 3}, "session_date"),
        ({"session_date": "01/01/2025", "reflection": "  ", "rating": 3}, "reflection"),
        ({"session_date": "01/01/2025", "reflection": "ok", "rating": 0}, "rating"),
        ({"session_date": "01/01/2025", "reflection": "ok", "rating": 6}, "rating"),
    ],
)
async def test_save_reflection_validation(reflection_service, reflection_repo, data, field) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await reflection_service.save_reflection("alice", ReflectionForm(**data))

    assert exc_info.value.message == "Please add a date, reflection and rating."
    assert exc_info.value.details == {"field": field}
    assert reflection_repo.entries == []


async def test_list_reflections_newest_first(reflection_service) -> None:
    for day in ("01/01/2025", "02/01/2025"):
        await reflection_service.save_reflection(
            "alice", ReflectionForm(session_date=day, reflection="notes", rating=5)
        )
    await reflection_service.save_reflection(
        "bob", ReflectionForm(session_date="03/01/2025", reflection="notes", rating=5)
    )

    entries = await reflection_service.list_reflections("alice")

    assert [e.date for e in entries] == ["02/01/2025", "01/01/2025"]
