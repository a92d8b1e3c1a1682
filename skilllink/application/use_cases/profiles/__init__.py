"""Profile use cases."""

from skilllink.application.use_cases.profiles.profile_operations import ProfileService

__all__ = ["ProfileService"]
