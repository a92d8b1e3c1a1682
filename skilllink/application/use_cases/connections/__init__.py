"""Connection use cases."""

from skilllink.application.use_cases.connections.connection_operations import (
    ConnectionService,
)

__all__ = ["ConnectionService"]
