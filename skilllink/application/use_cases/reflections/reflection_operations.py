"""Feedback reflections: save with points, list newest first."""

from __future__ import annotations

import logging

from skilllink.application.dtos.reflection import ReflectionSaved
from skilllink.application.interfaces.repositories import IReflectionRepository
from skilllink.domain.entities.reflection import MAX_RATING, MIN_RATING, ReflectionEntry
from skilllink.domain.exceptions import ValidationException
from skilllink.schemas.forms import ReflectionForm
from skilllink.shared.telemetry.tracing import traced
from skilllink.shared.utils.datetime import utc_now
from skilllink.shared.utils.sanitization import InputSanitizer, split_topics

logger = logging.getLogger(__name__)

REFLECTION_POINTS = 20


class ReflectionService:
    """Session reflections (``feedback`` collection)."""

    def __init__(self, reflection_repo: IReflectionRepository) -> None:
        self.reflection_repo = reflection_repo

    @traced("reflections.save")
    async def save_reflection(self, user_id: str, form: ReflectionForm) -> ReflectionSaved:
        """Validate and store a reflection; award points.

        Raises:
            ValidationException: If date, reflection text, or a 1-5 rating is missing.
        """
        notes = InputSanitizer.clean_text(form.reflection)
        if not form.session_date or not notes or not MIN_RATING <= form.rating <= MAX_RATING:
            field = (
                "session_date" if not form.session_date
                else "reflection" if not notes
                else "rating"
            )
            raise ValidationException("Please add a date, reflection and rating.", field=field)

        entry = await self.reflection_repo.create(user_id, {
            "userId": user_id,
            "date": form.session_date,
            "topics": split_topics(form.topics),
            "notes": notes,
            "rating": form.rating,
            "createdAt": utc_now(),
        })
        logger.info("Reflection %s saved for %s", entry.id, user_id)
        return ReflectionSaved(entry=entry, points_earned=REFLECTION_POINTS)

    async def list_reflections(self, user_id: str) -> list[ReflectionEntry]:
        return await self.reflection_repo.list_for_user(user_id)
