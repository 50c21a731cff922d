"""Message repository interface."""

from abc import ABC, abstractmethod

from kindred.domain.model.message import Message
from kindred.domain.value import RelationshipId


class MessageRepository(ABC):
    """Repository for relationship messages."""

    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Save a message.

        Args:
            message: The message to save

        Returns:
            The saved message
        """
        pass

    @abstractmethod
    async def find_by_relationship(
        self, relationship_id: RelationshipId, limit: int = 50
    ) -> list[Message]:
        """List messages of a relationship, newest first.

        Args:
            relationship_id: Relationship the messages belong to
            limit: Maximum number of results

        Returns:
            List of messages
        """
        pass
