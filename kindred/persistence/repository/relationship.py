"""PostgreSQL implementation of Relationship repository."""

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kindred.domain.error import ConflictError
from kindred.domain.model import Relationship
from kindred.domain.repository import RelationshipRepository
from kindred.domain.value import RelationshipId
from kindred.persistence.database import store_call
from kindred.persistence.mappers import relationship_to_dict, row_to_relationship
from kindred.persistence.tables import relationships_table


class PostgresRelationshipRepository(RelationshipRepository):
    """PostgreSQL implementation of RelationshipRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def find_by_id(self, relationship_id: RelationshipId) -> Relationship | None:
        """Find a relationship by ID."""
        stmt = select(relationships_table).where(
            relationships_table.c.id == relationship_id
        )
        async with store_call(self.session_factory, "relationship.find") as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_relationship(dict(row)) if row else None

    async def create(self, relationship: Relationship) -> Relationship:
        """Insert a relationship.

        Raises:
            ConflictError: If the id already exists
        """
        stmt = insert(relationships_table).values(**relationship_to_dict(relationship))
        async with store_call(self.session_factory, "relationship.create") as session:
            try:
                await session.execute(stmt)
            except IntegrityError as e:
                raise ConflictError("Relationship", str(relationship.id)) from e
        return relationship
