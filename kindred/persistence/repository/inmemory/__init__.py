"""In-memory repository implementations for testing."""

from .edge import InMemoryEdgeRepository
from .invite import InMemoryGroupInviteRepository
from .message import InMemoryMessageRepository
from .profile import InMemoryProfileRepository
from .relationship import InMemoryRelationshipRepository

__all__ = [
    "InMemoryEdgeRepository",
    "InMemoryGroupInviteRepository",
    "InMemoryMessageRepository",
    "InMemoryProfileRepository",
    "InMemoryRelationshipRepository",
]
