"""Message entity.

The engine only writes the seed message of a new relationship. Everything
else about chat lives in the message service.
"""

from datetime import datetime

from pydantic import Field

from kindred.domain.model.common import DomainModel, utcnow
from kindred.domain.value import MessageId, RelationshipId, UserId


class Message(DomainModel):
    """Chat message attached to a relationship."""

    id: MessageId
    relationship_id: RelationshipId
    sender: UserId
    content: str
    is_unread: bool = True
    created_at: datetime = Field(default_factory=utcnow)
