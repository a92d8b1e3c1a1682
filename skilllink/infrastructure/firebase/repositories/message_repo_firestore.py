"""Firestore-backed chat message repository (implements IMessageRepository)."""

from __future__ import annotations

from skilllink.domain.entities.message import ChatMessage
from skilllink.infrastructure.firebase._rest_client import FirestoreRESTClient
from skilllink.infrastructure.firebase.collections import messages_path
from skilllink.shared.utils.datetime import ensure_utc, utc_now


class FirestoreMessageRepository:
    """Messages under ``conversations/{conversation_id}/messages``."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    async def add(self, conversation_id: str, sender_id: str, text: str) -> ChatMessage:
        """Store a message and return it."""
        now = utc_now()
        snapshot = await self._client.collection(messages_path(conversation_id)).add({
            "text": text,
            "senderId": sender_id,
            "createdAt": now,
        })
        return ChatMessage(
            id=snapshot.id,
            conversation_id=conversation_id,
            sender_id=sender_id,
            text=text,
            created_at=now,
        )

    async def list_for_conversation(
        self, conversation_id: str, limit: int = 100
    ) -> list[ChatMessage]:
        """Return the newest ``limit`` messages, oldest first."""
        q = (
            self._client.collection(messages_path(conversation_id))
            .order_by("createdAt", "DESCENDING")
            .limit(limit)
        )
        messages: list[ChatMessage] = []
        async for snapshot in q.stream():
            data = snapshot.to_dict()
            messages.append(
                ChatMessage(
                    id=snapshot.id,
                    conversation_id=conversation_id,
                    sender_id=data.get("senderId", ""),
                    text=data.get("text", ""),
                    created_at=ensure_utc(data.get("createdAt")),
                )
            )
        messages.reverse()
        return messages
