"""DTOs for reflection use cases."""

from dataclasses import dataclass

from skilllink.domain.entities.reflection import ReflectionEntry


@dataclass(frozen=True)
class ReflectionSaved:
    """Result of saving a reflection: the stored entry and points awarded."""

    entry: ReflectionEntry
    points_earned: int
