"""In-memory relationship repository for testing."""

import asyncio

from kindred.domain.error import ConflictError
from kindred.domain.model.relationship import Relationship
from kindred.domain.repository.relationship import RelationshipRepository
from kindred.domain.value import RelationshipId


class InMemoryRelationshipRepository(RelationshipRepository):
    """In-memory implementation of RelationshipRepository for testing."""

    def __init__(self) -> None:
        self._relationships: dict[RelationshipId, Relationship] = {}

    async def find_by_id(self, relationship_id: RelationshipId) -> Relationship | None:
        """Find a relationship by ID."""
        await asyncio.sleep(0)
        return self._relationships.get(relationship_id)

    async def create(self, relationship: Relationship) -> Relationship:
        """Insert a new relationship.

        Raises:
            ConflictError: If the id is already taken
        """
        await asyncio.sleep(0)
        if relationship.id in self._relationships:
            raise ConflictError("Relationship", str(relationship.id))
        self._relationships[relationship.id] = relationship
        return relationship

    def count(self) -> int:
        """Number of stored relationships."""
        return len(self._relationships)
