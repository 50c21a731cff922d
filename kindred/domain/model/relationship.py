"""Relationship aggregate.

A relationship is the undirected result of a mutual match or an approved
group invite. Its id is generated once and never changes.
"""

from datetime import datetime

from pydantic import Field

from kindred.domain.model.common import DomainModel, utcnow
from kindred.domain.value import (
    RelationshipId,
    RelationshipKind,
    RelationshipStatus,
    UserId,
)


class Relationship(DomainModel):
    """Private match or group.

    Business rules:
    - Private relationships have exactly two members
    - Groups have at least three members
    - Membership is append-only
    """

    id: RelationshipId
    members: frozenset[UserId]
    kind: RelationshipKind
    status: RelationshipStatus = RelationshipStatus.ACTIVE
    created_at: datetime = Field(default_factory=utcnow)
