"""Reflection use cases."""

from skilllink.application.use_cases.reflections.reflection_operations import (
    REFLECTION_POINTS,
    ReflectionService,
)

__all__ = ["REFLECTION_POINTS", "ReflectionService"]
