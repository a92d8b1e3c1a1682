"""Firestore-backed repository implementations."""

from skilllink.infrastructure.firebase.repositories.connection_repo_firestore import (
    FirestoreRelationshipStore,
)
from skilllink.infrastructure.firebase.repositories.event_repo_firestore import (
    FirestoreEventRepository,
)
from skilllink.infrastructure.firebase.repositories.message_repo_firestore import (
    FirestoreMessageRepository,
)
from skilllink.infrastructure.firebase.repositories.profile_repo_firestore import (
    FirestoreProfileRepository,
)
from skilllink.infrastructure.firebase.repositories.reflection_repo_firestore import (
    FirestoreReflectionRepository,
)

__all__ = [
    "FirestoreEventRepository",
    "FirestoreMessageRepository",
    "FirestoreProfileRepository",
    "FirestoreReflectionRepository",
    "FirestoreRelationshipStore",
]
