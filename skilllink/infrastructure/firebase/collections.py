"""Firestore collection names (schema-in-code).

Firestore has no DDL. Names match what the SkillLink mobile app reads
and writes, so both clients share the same data.
"""

COLLECTION_USERS = "users"
COLLECTION_CONNECTIONS = "connections"
# One document per pair with an active connection record (id = pair key).
COLLECTION_CONNECTION_PAIRS = "connection_pairs"
COLLECTION_EVENTS = "events"
COLLECTION_CONVERSATIONS = "conversations"
SUBCOLLECTION_MESSAGES = "messages"
COLLECTION_FEEDBACK = "feedback"


def messages_path(conversation_id: str) -> str:
    """Collection path of one conversation's messages."""
    return f"{COLLECTION_CONVERSATIONS}/{conversation_id}/{SUBCOLLECTION_MESSAGES}"
