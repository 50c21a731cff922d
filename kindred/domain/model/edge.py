"""Interaction edge entity.

An edge is one user's latest intent toward another. The ordered pair
(sender, receiver) identifies it; later actions between the same pair
mutate it in place.
"""

from datetime import datetime

from pydantic import Field

from kindred.domain.model.common import DomainModel, utcnow
from kindred.domain.value import (
    EdgeStatus,
    InteractionKind,
    RelationshipId,
    UserId,
)


class InteractionEdge(DomainModel):
    """Directed intent record from sender to receiver."""

    sender: UserId
    receiver: UserId
    kind: InteractionKind
    status: EdgeStatus
    message: str | None = None  # Ping text, stored verbatim
    relationship_id: RelationshipId | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def key(self) -> str:
        return f"{self.sender}->{self.receiver}"

    def is_matched_to(self, relationship_id: RelationshipId) -> bool:
        return (
            self.status == EdgeStatus.MATCH
            and self.relationship_id == relationship_id
        )

    def advance(self, **changes) -> "InteractionEdge":
        """Copy of this edge with ``changes`` applied and a fresh updated_at."""
        return self.model_copy(update={**changes, "updated_at": utcnow()})
