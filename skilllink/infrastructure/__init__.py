"""Infrastructure layer: Firestore-backed implementations of application ports."""
