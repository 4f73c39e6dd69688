"""Repository layer for board persistence."""

from .memory import InMemoryPersistence
from .protocol import MoveResult, PersistenceProtocol

__all__ = [
    "InMemoryPersistence",
    "MoveResult",
    "PersistenceProtocol",
]
