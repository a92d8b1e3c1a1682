"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations.
No runtime imports from skilllink.infrastructure.
"""

from skilllink.application.interfaces.repositories import (
    IEventRepository,
    IMessageRepository,
    IProfileRepository,
    IReflectionRepository,
    IRelationshipStore,
)

__all__ = [
    "IEventRepository",
    "IMessageRepository",
    "IProfileRepository",
    "IReflectionRepository",
    "IRelationshipStore",
]
