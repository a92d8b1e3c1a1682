"""Event use cases."""

from skilllink.application.use_cases.events.event_operations import EventService

__all__ = ["EventService"]
