"""Firestore integration (REST client and repositories)."""

from skilllink.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
    require_firestore_client,
)

__all__ = [
    "close_firebase",
    "get_firestore_client",
    "init_firebase",
    "require_firestore_client",
]
