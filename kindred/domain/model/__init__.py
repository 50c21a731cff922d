"""Domain model entities for Kindred."""

from kindred.domain.model.edge import InteractionEdge
from kindred.domain.model.invite import GroupInvite
from kindred.domain.model.message import Message
from kindred.domain.model.relationship import Relationship
from kindred.domain.model.resolution import (
    Attempt,
    Conflict,
    Failed,
    Resolution,
    Resolved,
)

__all__ = [
    "InteractionEdge",
    "Relationship",
    "Message",
    "GroupInvite",
    "Resolution",
    "Attempt",
    "Resolved",
    "Conflict",
    "Failed",
]
