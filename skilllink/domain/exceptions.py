"""Domain exceptions for SkillLink.

Defines domain-level exceptions that represent business rule violations.
They are independent of Firestore; the UI collaborator maps them to
user-facing alerts by error_code.
"""

from typing import Any


class SkillLinkException(Exception):
    """Base exception for all SkillLink errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, record_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(SkillLinkException):
    """Raised when input validation fails (e.g. missing form field, bad capacity)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(SkillLinkException):
    """Raised when a requested document is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'connection', 'event').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreUnavailableError(SkillLinkException):
    """Raised when an operation needs Firestore but no credentials are configured."""

    def __init__(self) -> None:
        super().__init__(
            "Firestore is not configured. Set FIREBASE_SERVICE_ACCOUNT_KEY or "
            "FIREBASE_SERVICE_ACCOUNT_PATH.",
            "SERVICE_UNAVAILABLE",
        )


# Connections


class InvalidRecordError(SkillLinkException):
    """Raised when a connection record from the store is malformed.

    Covers self-relationships and missing requester/receiver ids. This is a
    data-integrity problem, not a user error.
    """

    def __init__(self, reason: str, record_id: str | None = None) -> None:
        """Initialize with a reason and the offending record id, if known.

        Args:
            reason: What is wrong with the record.
            record_id: Optional id of the malformed record.
        """
        details: dict[str, Any] = {"reason": reason}
        if record_id:
            details["record_id"] = record_id
        super().__init__(f"Invalid connection record: {reason}", "INVALID_RECORD", details)


class DuplicateRequestError(SkillLinkException):
    """Raised when a pair already has an active (pending or accepted) record.

    details carries the current state so the caller can show "Pending" or
    "Connected" instead of re-sending.
    """

    def __init__(
        self,
        from_id: str,
        to_id: str,
        current_state: str | None = None,
        record_id: str | None = None,
    ) -> None:
        """Initialize with the pair and the state that blocks the request.

        Args:
            from_id: Requesting user.
            to_id: Requested counterpart.
            current_state: Resolved state from the requester's view, if known.
            record_id: Id of the blocking record, if known.
        """
        details: dict[str, Any] = {"from_id": from_id, "to_id": to_id}
        if current_state:
            details["current_state"] = current_state
        if record_id:
            details["record_id"] = record_id
        super().__init__(
            "A connection request already exists between these users",
            "DUPLICATE_REQUEST",
            details,
        )


class NotAuthorizedError(SkillLinkException):
    """Raised when the acting user is not the party allowed to perform the action."""

    def __init__(
        self,
        action: str,
        acting_user_id: str,
        resource_id: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize with the attempted action and actor.

        Args:
            action: Action that was attempted (e.g. 'accept', 'cancel').
            acting_user_id: User who attempted it.
            resource_id: Optional id of the record or event involved.
            message: Optional override for the default message.
        """
        details: dict[str, Any] = {"action": action, "acting_user_id": acting_user_id}
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(
            message or f"User is not allowed to {action} this resource",
            "NOT_AUTHORIZED",
            details,
        )


class InvalidStateError(SkillLinkException):
    """Raised when a transition is attempted from a status that does not permit it.

    Also raised when a concurrent write won the race for the same record.
    """

    def __init__(
        self,
        record_id: str,
        action: str,
        current_status: str | None,
        message: str | None = None,
    ) -> None:
        """Initialize with the record, attempted action, and status found.

        Args:
            record_id: Record that could not be transitioned.
            action: Attempted action (e.g. 'accept').
            current_status: Status observed on the record (None if unknown).
            message: Optional override for the default message.
        """
        super().__init__(
            message or f"Cannot {action} a {current_status or 'missing'} record",
            "INVALID_STATE",
            {"record_id": record_id, "action": action, "current_status": current_status},
        )


class PreconditionFailedError(SkillLinkException):
    """Raised by a store when a conditional write finds an unexpected current value."""

    def __init__(
        self,
        resource_id: str,
        expected: str | None = None,
        actual: str | None = None,
    ) -> None:
        """Initialize with the resource and the expected vs actual value.

        Args:
            resource_id: Document the write targeted.
            expected: Value the write required (e.g. 'pending').
            actual: Value found, when known.
        """
        super().__init__(
            "Document changed since it was read; reload and retry.",
            "PRECONDITION_FAILED",
            {"resource_id": resource_id, "expected": expected, "actual": actual},
        )


class ConflictError(SkillLinkException):
    """Raised by a store when a create violates a uniqueness constraint."""

    def __init__(self, key: str) -> None:
        """Initialize with the conflicting unique key.

        Args:
            key: The unique key that already exists (e.g. pair key).
        """
        super().__init__(
            f"A document with key '{key}' already exists",
            "CONFLICT",
            {"key": key},
        )


# Events


class EventFullError(SkillLinkException):
    """Raised when joining an event that has reached its capacity."""

    def __init__(self, event_id: str, capacity: int) -> None:
        super().__init__(
            "This event has reached its capacity.",
            "EVENT_FULL",
            {"event_id": event_id, "capacity": capacity},
        )


class AlreadyJoinedError(SkillLinkException):
    """Raised when a user joins an event they already attend."""

    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(
            "You have already joined this event.",
            "ALREADY_JOINED",
            {"event_id": event_id, "user_id": user_id},
        )
