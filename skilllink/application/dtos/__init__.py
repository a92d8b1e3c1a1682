"""Application DTOs (read-models returned by use cases)."""

from skilllink.application.dtos.connection import (
    ConnectionEntry,
    ConnectionList,
    ConnectionProjection,
    ProjectionCounts,
)
from skilllink.application.dtos.profile import ProfileCard
from skilllink.application.dtos.reflection import ReflectionSaved

__all__ = [
    "ConnectionEntry",
    "ConnectionList",
    "ConnectionProjection",
    "ProfileCard",
    "ProjectionCounts",
    "ReflectionSaved",
]
