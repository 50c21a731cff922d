"""In-memory message repository for testing."""

import asyncio

from kindred.domain.model.message import Message
from kindred.domain.repository.message import MessageRepository
from kindred.domain.value import RelationshipId


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    async def save(self, message: Message) -> Message:
        """Save a message (create or replace by id)."""
        await asyncio.sleep(0)
        for i, existing in enumerate(self._messages):
            if existing.id == message.id:
                self._messages[i] = message
                return message
        self._messages.append(message)
        return message

    async def find_by_relationship(
        self, relationship_id: RelationshipId, limit: int = 50
    ) -> list[Message]:
        """List messages of a relationship, newest first."""
        await asyncio.sleep(0)
        matches = [m for m in self._messages if m.relationship_id == relationship_id]
        matches.sort(key=lambda m: m.created_at, reverse=True)
        return matches[:limit]
