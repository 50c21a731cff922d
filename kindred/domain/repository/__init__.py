"""Repository interfaces for the Kindred domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from kindred.domain.repository.edge import EdgeRepository
from kindred.domain.repository.invite import GroupInviteRepository
from kindred.domain.repository.message import MessageRepository
from kindred.domain.repository.profile import ProfileRepository
from kindred.domain.repository.relationship import RelationshipRepository

__all__ = [
    "EdgeRepository",
    "RelationshipRepository",
    "MessageRepository",
    "GroupInviteRepository",
    "ProfileRepository",
]
