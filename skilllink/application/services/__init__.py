"""Application services: connection state resolution, transitions, projection."""

from skilllink.application.services.connection_projection import project
from skilllink.application.services.connection_transition_engine import (
    ConnectionTransitionEngine,
    CreateRecord,
    DeleteRecord,
    NoChange,
    UpdateStatus,
    WriteOperation,
)
from skilllink.application.services.event_filters import filter_events_for_tab
from skilllink.application.services.relationship_resolver import (
    resolve_relationships,
    state_for,
)

__all__ = [
    "ConnectionTransitionEngine",
    "CreateRecord",
    "DeleteRecord",
    "NoChange",
    "UpdateStatus",
    "WriteOperation",
    "filter_events_for_tab",
    "project",
    "resolve_relationships",
    "state_for",
]
