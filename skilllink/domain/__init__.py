"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure. Used by application and
infrastructure layers.
"""

from skilllink.domain.entities import (
    MentorshipEvent,
    RelationshipRecord,
    ResolvedRelationship,
    UserProfile,
)
from skilllink.domain.enums import (
    ConnectionCategory,
    EventTab,
    RelationshipState,
    RelationshipStatus,
    UserRole,
)
from skilllink.domain.exceptions import (
    AlreadyJoinedError,
    ConflictError,
    DuplicateRequestError,
    EventFullError,
    InvalidRecordError,
    InvalidStateError,
    NotAuthorizedError,
    PreconditionFailedError,
    ResourceNotFoundException,
    SkillLinkException,
    StoreUnavailableError,
    ValidationException,
)

__all__ = [
    # Entities
    "MentorshipEvent",
    "RelationshipRecord",
    "ResolvedRelationship",
    "UserProfile",
    # Enums
    "ConnectionCategory",
    "EventTab",
    "RelationshipState",
    "RelationshipStatus",
    "UserRole",
    # Exceptions
    "AlreadyJoinedError",
    "ConflictError",
    "DuplicateRequestError",
    "EventFullError",
    "InvalidRecordError",
    "InvalidStateError",
    "NotAuthorizedError",
    "PreconditionFailedError",
    "ResourceNotFoundException",
    "SkillLinkException",
    "StoreUnavailableError",
    "ValidationException",
]
