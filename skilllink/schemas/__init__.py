"""Input schemas (pydantic)."""

from skilllink.schemas.forms import EventCreateForm, ProfileRegistration, ReflectionForm

__all__ = ["EventCreateForm", "ProfileRegistration", "ReflectionForm"]
