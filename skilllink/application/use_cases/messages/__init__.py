"""Message use cases."""

from skilllink.application.use_cases.messages.message_operations import MessageService

__all__ = ["MessageService"]
