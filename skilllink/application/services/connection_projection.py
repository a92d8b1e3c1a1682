"""Group resolved relationships into the Connections screen lists and counts."""

from __future__ import annotations

from collections.abc import Mapping

from skilllink.application.dtos.connection import ConnectionProjection, ProjectionCounts
from skilllink.domain.entities.relationship import ResolvedRelationship
from skilllink.domain.enums import ConnectionCategory, RelationshipState, UserRole
from skilllink.domain.exceptions import ValidationException


def project(
    resolved: Mapping[str, ResolvedRelationship],
    category: ConnectionCategory = ConnectionCategory.ALL,
    roles: Mapping[str, UserRole] | None = None,
) -> ConnectionProjection:
    """Split resolved relationships into incoming, outgoing, and active lists.

    Filtering by category only looks at ``roles`` (counterpart id -> role)
    supplied by the caller; counterparts with no known role are dropped by
    any role filter. Lists are ordered by counterpart id.

    Raises:
        ValidationException: If a role category is requested without roles.
    """
    if category is not ConnectionCategory.ALL and roles is None:
        raise ValidationException(
            "Counterpart roles are required to filter by category", field="roles"
        )
    role_of = roles or {}

    incoming: list[ResolvedRelationship] = []
    outgoing: list[ResolvedRelationship] = []
    active: list[ResolvedRelationship] = []
    for counterpart_id in sorted(resolved):
        entry = resolved[counterpart_id]
        if not category.matches(role_of.get(counterpart_id)):
            continue
        if entry.state is RelationshipState.PENDING_INCOMING:
            incoming.append(entry)
        elif entry.state is RelationshipState.PENDING_OUTGOING:
            outgoing.append(entry)
        elif entry.state is RelationshipState.ACCEPTED:
            active.append(entry)

    counts = ProjectionCounts(
        all=len(incoming) + len(outgoing) + len(active),
        pending=len(incoming) + len(outgoing),
        active=len(active),
    )
    return ConnectionProjection(
        incoming=tuple(incoming),
        outgoing=tuple(outgoing),
        active=tuple(active),
        counts=counts,
    )
