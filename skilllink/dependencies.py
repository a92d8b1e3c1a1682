"""Composition root.

Builds the application services from the Firestore implementations. Callers
(the UI layer) depend on the services only, never on infrastructure directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from skilllink.application.use_cases import (
    ConnectionService,
    EventService,
    MessageService,
    ProfileService,
    ReflectionService,
)
from skilllink.core.config import Settings, get_settings
from skilllink.infrastructure.firebase._rest_client import FirestoreRESTClient
from skilllink.infrastructure.firebase.client import require_firestore_client
from skilllink.infrastructure.firebase.repositories import (
    FirestoreEventRepository,
    FirestoreMessageRepository,
    FirestoreProfileRepository,
    FirestoreReflectionRepository,
    FirestoreRelationshipStore,
)


@dataclass(frozen=True)
class SkillLinkServices:
    """Use cases wired to one Firestore client."""

    connections: ConnectionService
    profiles: ProfileService
    events: EventService
    messages: MessageService
    reflections: ReflectionService


def build_services(
    client: FirestoreRESTClient | None = None,
    settings: Settings | None = None,
) -> SkillLinkServices:
    """Wire every service to Firestore.

    Args:
        client: Firestore client; defaults to the process-wide one from init_firebase().
        settings: Settings; defaults to get_settings().

    Raises:
        StoreUnavailableError: If no client is given and Firestore is not initialized.
    """
    settings = settings or get_settings()
    client = client or require_firestore_client()

    profile_repo = FirestoreProfileRepository(client)
    store = FirestoreRelationshipStore(
        client, enforce_pair_uniqueness=settings.enforce_pair_uniqueness
    )
    connections = ConnectionService(store, profile_repo)
    return SkillLinkServices(
        connections=connections,
        profiles=ProfileService(profile_repo, connections),
        events=EventService(FirestoreEventRepository(client), profile_repo),
        messages=MessageService(FirestoreMessageRepository(client), connections, settings),
        reflections=ReflectionService(FirestoreReflectionRepository(client)),
    )
