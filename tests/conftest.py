"""Pytest configuration and fixtures for skilllink.

Services are built on the in-memory fakes in tests/fakes.py; Firestore tests
use httpx.MockTransport and never reach the network.
"""

import httpx
import pytest

from skilllink.application.use_cases import (
    ConnectionService,
    EventService,
    MessageService,
    ProfileService,
    ReflectionService,
)
from skilllink.core.config import Settings, get_settings
from skilllink.domain.enums import UserRole
from skilllink.infrastructure.firebase._rest_client import FirestoreRESTClient
from tests.fakes import (
    InMemoryEventRepository,
    InMemoryMessageRepository,
    InMemoryProfileRepository,
    InMemoryReflectionRepository,
    InMemoryRelationshipStore,
    make_profile,
)
from tests.firestore_fake import BASE_URL, PROJECT_ID, FakeFirestore


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Clear cached settings around each test so env overrides apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def profile_repo() -> InMemoryProfileRepository:
    """Two students (alice, bob) and two mentors (carol, dave)."""
    return InMemoryProfileRepository([
        make_profile("alice", "Alice"),
        make_profile("bob", "Bob"),
        make_profile("carol", "Carol", UserRole.MENTOR),
        make_profile("dave", "Dave", UserRole.MENTOR),
    ])


@pytest.fixture
def store() -> InMemoryRelationshipStore:
    return InMemoryRelationshipStore()


@pytest.fixture
def connection_service(store, profile_repo) -> ConnectionService:
    return ConnectionService(store, profile_repo)


@pytest.fixture
def profile_service(profile_repo, connection_service) -> ProfileService:
    return ProfileService(profile_repo, connection_service)


@pytest.fixture
def event_repo() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def event_service(event_repo, profile_repo) -> EventService:
    return EventService(event_repo, profile_repo)


@pytest.fixture
def message_repo() -> InMemoryMessageRepository:
    return InMemoryMessageRepository()


@pytest.fixture
def message_service(message_repo, connection_service, settings) -> MessageService:
    return MessageService(message_repo, connection_service, settings)


@pytest.fixture
def reflection_repo() -> InMemoryReflectionRepository:
    return InMemoryReflectionRepository()


@pytest.fixture
def reflection_service(reflection_repo) -> ReflectionService:
    return ReflectionService(reflection_repo)


@pytest.fixture
def fake_firestore() -> FakeFirestore:
    return FakeFirestore()


@pytest.fixture
async def firestore_client(fake_firestore):
    """FirestoreRESTClient wired to the in-memory endpoint (no credentials)."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_firestore.handler))
    client = FirestoreRESTClient(PROJECT_ID, None, http_client=http, base_url=BASE_URL)
    yield client
    await http.aclose()
