"""Chat between connected users."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from skilllink.application.interfaces.repositories import IMessageRepository
from skilllink.application.services.relationship_resolver import state_for
from skilllink.core.config import Settings, get_settings
from skilllink.domain.entities.message import ChatMessage, conversation_id
from skilllink.domain.enums import RelationshipState
from skilllink.domain.exceptions import NotAuthorizedError, ValidationException
from skilllink.shared.telemetry.tracing import traced
from skilllink.shared.utils.sanitization import InputSanitizer

if TYPE_CHECKING:
    from skilllink.application.use_cases.connections import ConnectionService

logger = logging.getLogger(__name__)


class MessageService:
    """Send and read messages in a two-person conversation."""

    def __init__(
        self,
        message_repo: IMessageRepository,
        connection_service: ConnectionService,
        settings: Settings | None = None,
    ) -> None:
        self.message_repo = message_repo
        self.connection_service = connection_service
        self.settings = settings or get_settings()

    @traced("messages.send")
    async def send_message(
        self, sender_id: str, recipient_id: str, text: str
    ) -> ChatMessage:
        """Store a message from sender_id to recipient_id.

        Raises:
            ValidationException: On empty or over-long text, or messaging oneself.
            NotAuthorizedError: If chat requires a connection and the users are not connected.
        """
        if not sender_id or not recipient_id or sender_id == recipient_id:
            raise ValidationException("A message needs two different users", field="recipient_id")
        cleaned = InputSanitizer.clean_text(text)
        if not cleaned:
            raise ValidationException("Message text is required", field="text")
        if len(cleaned) > self.settings.max_message_length:
            raise ValidationException(
                f"Message is longer than {self.settings.max_message_length} characters",
                field="text",
            )

        if self.settings.require_connection_for_chat:
            resolved = await self.connection_service.resolve(sender_id)
            if state_for(resolved, recipient_id).state is not RelationshipState.ACCEPTED:
                raise NotAuthorizedError(
                    "message",
                    sender_id,
                    recipient_id,
                    message="You can only message users you are connected with",
                )

        message = await self.message_repo.add(
            conversation_id(sender_id, recipient_id), sender_id, cleaned
        )
        logger.debug("Message %s stored in %s", message.id, message.conversation_id)
        return message

    async def list_messages(
        self, user_id: str, other_user_id: str, limit: int | None = None
    ) -> list[ChatMessage]:
        """Return the newest page of the conversation, oldest first."""
        return await self.message_repo.list_for_conversation(
            conversation_id(user_id, other_user_id),
            limit=limit or self.settings.message_page_size,
        )
