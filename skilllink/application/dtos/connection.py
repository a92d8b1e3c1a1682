"""DTOs for connection use cases (projection and decorated lists)."""

from dataclasses import dataclass

from skilllink.domain.entities.profile import UserProfile
from skilllink.domain.entities.relationship import ResolvedRelationship


@dataclass(frozen=True)
class ProjectionCounts:
    """Tab badge counts. ``all`` excludes declined relationships."""

    all: int
    pending: int
    active: int


@dataclass(frozen=True)
class ConnectionProjection:
    """Resolved relationships grouped for the Connections screen."""

    incoming: tuple[ResolvedRelationship, ...]
    outgoing: tuple[ResolvedRelationship, ...]
    active: tuple[ResolvedRelationship, ...]
    counts: ProjectionCounts


@dataclass(frozen=True)
class ConnectionEntry:
    """One relationship decorated with the counterpart's profile."""

    relationship: ResolvedRelationship
    counterpart: UserProfile


@dataclass(frozen=True)
class ConnectionList:
    """Decorated projection (same grouping as ConnectionProjection)."""

    incoming: tuple[ConnectionEntry, ...]
    outgoing: tuple[ConnectionEntry, ...]
    active: tuple[ConnectionEntry, ...]
    counts: ProjectionCounts
