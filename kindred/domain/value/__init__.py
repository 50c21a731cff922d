"""Domain value objects for Kindred."""

from kindred.domain.value.identifiers import (
    InviteId,
    MessageId,
    RelationshipId,
    UserId,
)
from kindred.domain.value.types import (
    EdgeStatus,
    InteractionAction,
    InteractionKind,
    InviteRecordType,
    InviteStatus,
    ProfileSummary,
    RelationshipKind,
    RelationshipStatus,
)

__all__ = [
    # Identifiers
    "UserId",
    "RelationshipId",
    "MessageId",
    "InviteId",
    # Types
    "InteractionKind",
    "InteractionAction",
    "EdgeStatus",
    "RelationshipKind",
    "RelationshipStatus",
    "InviteStatus",
    "InviteRecordType",
    "ProfileSummary",
]
