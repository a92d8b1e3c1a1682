"""Chat message entity (``conversations/{conversation_id}/messages``)."""

from dataclasses import dataclass
from datetime import datetime

from skilllink.shared.utils.generators import pair_key


def conversation_id(user_a: str, user_b: str) -> str:
    """Deterministic conversation id shared by both participants."""
    return pair_key(user_a, user_b)


@dataclass(frozen=True)
class ChatMessage:
    id: str
    conversation_id: str
    sender_id: str
    text: str
    created_at: datetime | None = None

    def is_from(self, user_id: str) -> bool:
        return self.sender_id == user_id
