"""Use cases: one service per feature area."""

from skilllink.application.use_cases.connections import ConnectionService
from skilllink.application.use_cases.events import EventService
from skilllink.application.use_cases.messages import MessageService
from skilllink.application.use_cases.profiles import ProfileService
from skilllink.application.use_cases.reflections import ReflectionService

__all__ = [
    "ConnectionService",
    "EventService",
    "MessageService",
    "ProfileService",
    "ReflectionService",
]
