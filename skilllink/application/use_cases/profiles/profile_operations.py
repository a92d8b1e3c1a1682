"""Profile operations: register, get, browse with connection state."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from skilllink.application.dtos.profile import ProfileCard
from skilllink.application.interfaces.repositories import IProfileRepository
from skilllink.application.services.relationship_resolver import state_for
from skilllink.domain.entities.profile import DEFAULT_SUBJECT, UserProfile, initials_for
from skilllink.domain.enums import ConnectionCategory, UserRole
from skilllink.domain.exceptions import ResourceNotFoundException, ValidationException
from skilllink.schemas.forms import ProfileRegistration
from skilllink.shared.telemetry.tracing import traced
from skilllink.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from skilllink.application.use_cases.connections import ConnectionService

logger = logging.getLogger(__name__)


class ProfileService:
    """Student and mentor profiles (``users`` collection)."""

    def __init__(
        self,
        profile_repo: IProfileRepository,
        connection_service: ConnectionService,
    ) -> None:
        self.profile_repo = profile_repo
        self.connection_service = connection_service

    @traced("profiles.register")
    async def register_profile(
        self, user_id: str, form: ProfileRegistration
    ) -> UserProfile:
        """Create the profile document for a newly authenticated user.

        Raises:
            ValidationException: On a missing user id, name, email, or an unknown role.
        """
        if not user_id:
            raise ValidationException("User id is required", field="user_id")
        if not form.name:
            raise ValidationException("Please enter your name", field="name")
        if not form.email or "@" not in form.email:
            raise ValidationException("Please enter a valid email address", field="email")
        if form.role not in (r.value for r in UserRole):
            raise ValidationException(
                f"Role must be one of: {', '.join(r.value for r in UserRole)}", field="role"
            )
        profile = await self.profile_repo.create(
            user_id,
            {
                "name": form.name,
                "email": form.email,
                "role": form.role,
                "avatar": initials_for(form.name),
                "categories": [form.role],
                "subject": form.subject or DEFAULT_SUBJECT,
                "createdAt": utc_now(),
            },
        )
        logger.info("Registered %s profile %s", profile.role.value, user_id)
        return profile

    async def get_profile(self, user_id: str) -> UserProfile:
        """Return the profile or raise ResourceNotFoundException."""
        profile = await self.profile_repo.get_by_id(user_id)
        if profile is None:
            raise ResourceNotFoundException("profile", user_id)
        return profile

    @traced("profiles.browse")
    async def browse_profiles(
        self,
        viewing_user_id: str,
        category: ConnectionCategory = ConnectionCategory.ALL,
    ) -> list[ProfileCard]:
        """List everyone except the viewer, filtered by role, with connection state.

        The state comes from the same resolver the connection actions use, so
        a card shows "Pending" or "Connected" exactly when a request would be
        rejected as a duplicate.
        """
        resolved = await self.connection_service.resolve(viewing_user_id)
        profiles = await self.profile_repo.list_all()
        cards: list[ProfileCard] = []
        for profile in profiles:
            if profile.id == viewing_user_id or not category.matches(profile.role):
                continue
            entry = state_for(resolved, profile.id)
            cards.append(ProfileCard(profile=profile, state=entry.state, record_id=entry.record_id))
        return cards
