"""Connection operations: resolve, request, accept, decline, cancel, list.

Every entry point that reads or changes a connection goes through this
service, so duplicate checks and authorization are applied the same way
everywhere. Results are always built from the record the store returns;
callers replace their cached view with the next resolve() instead of
patching it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from skilllink.application.dtos.connection import (
    ConnectionEntry,
    ConnectionList,
    ConnectionProjection,
)
from skilllink.application.interfaces.repositories import (
    IProfileRepository,
    IRelationshipStore,
)
from skilllink.application.services.connection_projection import project
from skilllink.application.services.connection_transition_engine import (
    ConnectionTransitionEngine,
    NoChange,
    UpdateStatus,
)
from skilllink.application.services.relationship_resolver import resolve_relationships
from skilllink.domain.entities.profile import UserProfile
from skilllink.domain.entities.relationship import (
    RelationshipRecord,
    ResolvedRelationship,
)
from skilllink.domain.enums import ConnectionCategory, UserRole
from skilllink.domain.exceptions import (
    ConflictError,
    DuplicateRequestError,
    InvalidStateError,
    PreconditionFailedError,
    ResourceNotFoundException,
)
from skilllink.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


def _view(record: RelationshipRecord, user_id: str) -> ResolvedRelationship:
    """Relationship described by a single record, from user_id's side."""
    return ResolvedRelationship(
        counterpart_id=record.counterpart_of(user_id),
        state=record.state_for(user_id),
        record_id=record.id,
    )


class ConnectionService:
    """Connection requests between students and mentors."""

    def __init__(
        self,
        store: IRelationshipStore,
        profile_repo: IProfileRepository,
        engine: ConnectionTransitionEngine | None = None,
    ) -> None:
        self.store = store
        self.profile_repo = profile_repo
        self.engine = engine or ConnectionTransitionEngine()

    @traced("connections.resolve")
    async def resolve(self, viewing_user_id: str) -> dict[str, ResolvedRelationship]:
        """Return the viewer's relationship with every counterpart that has a record.

        The whole snapshot is loaded before resolving; a failure anywhere
        raises instead of returning a partial mapping.
        """
        records = await self.store.list_records_involving(viewing_user_id)
        return resolve_relationships(viewing_user_id, records)

    @traced("connections.request")
    async def request_connection(self, from_id: str, to_id: str) -> ResolvedRelationship:
        """Send a connection request; return the relationship from the requester's view.

        Raises:
            ValidationException: On missing ids or a request to oneself.
            DuplicateRequestError: If the pair already has a pending or accepted record.
        """
        snapshot = await self.store.list_records_involving(from_id)
        op = self.engine.plan_request(from_id, to_id, snapshot)
        try:
            record = await self.store.create_record(op.requester_id, op.receiver_id)
        except ConflictError as exc:
            raise DuplicateRequestError(from_id, to_id) from exc
        logger.info(
            "Connection request %s sent from %s to %s", record.id, from_id, to_id
        )
        return _view(record, from_id)

    @traced("connections.accept")
    async def accept(self, record_id: str, acting_user_id: str) -> ResolvedRelationship:
        """Accept a pending request addressed to acting_user_id.

        Accepting an already accepted request returns the same result again.
        """
        return await self._respond(record_id, acting_user_id, "accept", self.engine.plan_accept)

    @traced("connections.decline")
    async def decline(self, record_id: str, acting_user_id: str) -> ResolvedRelationship:
        """Decline a pending request addressed to acting_user_id."""
        return await self._respond(record_id, acting_user_id, "decline", self.engine.plan_decline)

    @traced("connections.cancel")
    async def cancel(self, record_id: str, acting_user_id: str) -> ResolvedRelationship:
        """Withdraw a pending request sent by acting_user_id.

        The record is deleted, so the returned relationship is ``none`` and
        either user may send a new request.
        """
        record = await self._get_record(record_id)
        op = self.engine.plan_cancel(record, acting_user_id)
        try:
            await self.store.delete_record(op.record_id, op.expected_status)
        except PreconditionFailedError as exc:
            current = await self.store.get_record(record_id)
            raise InvalidStateError(
                record_id,
                "cancel",
                current.status.value if current else None,
                message="The request was answered before it could be cancelled",
            ) from exc
        logger.info("Connection request %s cancelled by %s", record_id, acting_user_id)
        return ResolvedRelationship.none(record.counterpart_of(acting_user_id))

    def project(
        self,
        resolved: dict[str, ResolvedRelationship],
        category: ConnectionCategory = ConnectionCategory.ALL,
        roles: dict[str, UserRole] | None = None,
    ) -> ConnectionProjection:
        """Group a resolved mapping into incoming/outgoing/active lists and counts."""
        return project(resolved, category, roles)

    @traced("connections.list")
    async def list_connections(
        self,
        viewing_user_id: str,
        category: ConnectionCategory = ConnectionCategory.ALL,
    ) -> ConnectionList:
        """Resolve, project, and attach counterpart profiles (one batch read)."""
        resolved = await self.resolve(viewing_user_id)
        profiles = await self.profile_repo.get_many(resolved.keys())
        roles = {user_id: p.role for user_id, p in profiles.items()}
        projection = project(resolved, category, roles)

        def decorate(entries: tuple[ResolvedRelationship, ...]) -> tuple[ConnectionEntry, ...]:
            return tuple(
                ConnectionEntry(
                    relationship=entry,
                    counterpart=profiles.get(entry.counterpart_id)
                    or UserProfile.placeholder(entry.counterpart_id),
                )
                for entry in entries
            )

        return ConnectionList(
            incoming=decorate(projection.incoming),
            outgoing=decorate(projection.outgoing),
            active=decorate(projection.active),
            counts=projection.counts,
        )

    async def _respond(
        self,
        record_id: str,
        acting_user_id: str,
        action: str,
        plan: Callable[[RelationshipRecord, str], UpdateStatus | NoChange],
    ) -> ResolvedRelationship:
        """Accept or decline: plan against the stored record, then write conditionally."""
        record = await self._get_record(record_id)
        op = plan(record, acting_user_id)
        if isinstance(op, NoChange):
            logger.debug("Connection %s already %s; nothing to do", record_id, record.status.value)
            return _view(op.record, acting_user_id)
        try:
            updated = await self.store.update_record_status(
                op.record_id, op.expected_status, op.new_status
            )
        except PreconditionFailedError as exc:
            # Lost a race: succeed only if the winner left the record where we wanted it.
            current = await self.store.get_record(record_id)
            if current is not None and current.status is op.new_status:
                return _view(current, acting_user_id)
            raise InvalidStateError(
                record_id,
                action,
                current.status.value if current else None,
                message="The request was changed by another action; reload and try again",
            ) from exc
        logger.info("Connection %s %s by %s", record_id, updated.status.value, acting_user_id)
        return _view(updated, acting_user_id)

    async def _get_record(self, record_id: str) -> RelationshipRecord:
        """Raise ResourceNotFoundException if the record does not exist."""
        record = await self.store.get_record(record_id)
        if record is None:
            raise ResourceNotFoundException("connection", record_id)
        return record
