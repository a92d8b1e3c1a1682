"""Validates connection actions and plans the store write for each one.

The engine holds no state and performs no I/O. Each plan_* method checks
authorization and the current status against a snapshot, then returns the
write the caller must issue. Writes are conditional on the status the
plan was made against.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from skilllink.application.services.relationship_resolver import (
    resolve_relationships,
    state_for,
)
from skilllink.domain.entities.relationship import RelationshipRecord
from skilllink.domain.enums import RelationshipStatus
from skilllink.domain.exceptions import (
    DuplicateRequestError,
    InvalidStateError,
    NotAuthorizedError,
    ValidationException,
)


@dataclass(frozen=True)
class CreateRecord:
    requester_id: str
    receiver_id: str


@dataclass(frozen=True)
class UpdateStatus:
    record_id: str
    expected_status: RelationshipStatus
    new_status: RelationshipStatus


@dataclass(frozen=True)
class DeleteRecord:
    record_id: str
    expected_status: RelationshipStatus


@dataclass(frozen=True)
class NoChange:
    """The record already holds the requested status (idempotent retry)."""

    record: RelationshipRecord


WriteOperation = CreateRecord | UpdateStatus | DeleteRecord | NoChange


class ConnectionTransitionEngine:
    """Checks request/accept/decline/cancel rules and plans the resulting write."""

    def plan_request(
        self,
        from_id: str,
        to_id: str,
        snapshot: Iterable[RelationshipRecord],
    ) -> CreateRecord:
        """Plan a new pending request from from_id to to_id.

        Declined records do not block a new request.

        Raises:
            ValidationException: If an id is missing or the users are the same.
            DuplicateRequestError: If the pair already has a pending or accepted record.
        """
        if not from_id:
            raise ValidationException("Requesting user id is required", field="from_id")
        if not to_id:
            raise ValidationException("Receiving user id is required", field="to_id")
        if from_id == to_id:
            raise ValidationException("Cannot send a connection request to yourself", field="to_id")

        current = state_for(resolve_relationships(from_id, snapshot), to_id)
        if current.is_active:
            raise DuplicateRequestError(
                from_id,
                to_id,
                current_state=current.state.value,
                record_id=current.record_id,
            )
        return CreateRecord(requester_id=from_id, receiver_id=to_id)

    def plan_accept(
        self, record: RelationshipRecord, acting_user_id: str
    ) -> UpdateStatus | NoChange:
        """Plan pending -> accepted. Only the receiver may accept."""
        return self._plan_response(record, acting_user_id, "accept", RelationshipStatus.ACCEPTED)

    def plan_decline(
        self, record: RelationshipRecord, acting_user_id: str
    ) -> UpdateStatus | NoChange:
        """Plan pending -> declined. Only the receiver may decline."""
        return self._plan_response(record, acting_user_id, "decline", RelationshipStatus.DECLINED)

    def plan_cancel(
        self, record: RelationshipRecord, acting_user_id: str
    ) -> DeleteRecord:
        """Plan deletion of a pending request by its requester.

        Deleting (rather than declining) leaves the pair free to request again.
        """
        record.validate()
        if acting_user_id != record.requester_id:
            raise NotAuthorizedError(
                "cancel",
                acting_user_id,
                record.id,
                message="Only the user who sent a request can cancel it",
            )
        if record.status is not RelationshipStatus.PENDING:
            raise InvalidStateError(record.id, "cancel", record.status.value)
        return DeleteRecord(record_id=record.id, expected_status=RelationshipStatus.PENDING)

    def _plan_response(
        self,
        record: RelationshipRecord,
        acting_user_id: str,
        action: str,
        target: RelationshipStatus,
    ) -> UpdateStatus | NoChange:
        record.validate()
        if acting_user_id != record.receiver_id:
            raise NotAuthorizedError(
                action,
                acting_user_id,
                record.id,
                message=f"Only the receiver of a request can {action} it",
            )
        if record.status is target:
            return NoChange(record)
        if record.status is not RelationshipStatus.PENDING:
            raise InvalidStateError(record.id, action, record.status.value)
        return UpdateStatus(
            record_id=record.id,
            expected_status=RelationshipStatus.PENDING,
            new_status=target,
        )
