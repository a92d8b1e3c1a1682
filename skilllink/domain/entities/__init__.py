"""Domain entities.

Pure domain models; no Firestore or presentation concerns.
"""

from skilllink.domain.entities.event import Attendee, MentorshipEvent
from skilllink.domain.entities.message import ChatMessage, conversation_id
from skilllink.domain.entities.profile import UserProfile
from skilllink.domain.entities.reflection import ReflectionEntry
from skilllink.domain.entities.relationship import (
    RelationshipRecord,
    ResolvedRelationship,
)

__all__ = [
    "Attendee",
    "ChatMessage",
    "MentorshipEvent",
    "ReflectionEntry",
    "RelationshipRecord",
    "ResolvedRelationship",
    "UserProfile",
    "conversation_id",
]
