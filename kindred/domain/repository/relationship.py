"""Relationship repository interface."""

from abc import ABC, abstractmethod

from kindred.domain.model.relationship import Relationship
from kindred.domain.value import RelationshipId


class RelationshipRepository(ABC):
    """Repository for Relationship aggregates."""

    @abstractmethod
    async def find_by_id(self, relationship_id: RelationshipId) -> Relationship | None:
        """Find a relationship by ID.

        Args:
            relationship_id: The relationship's unique identifier

        Returns:
            The relationship if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, relationship: Relationship) -> Relationship:
        """Insert a relationship that does not exist yet.

        Args:
            relationship: The relationship to create

        Returns:
            The created relationship

        Raises:
            ConflictError: If a relationship with the same id already exists
        """
        pass
