"""PostgreSQL implementation of InteractionEdge repository."""

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kindred.domain.error import ConflictError
from kindred.domain.model import InteractionEdge
from kindred.domain.repository import EdgeRepository
from kindred.domain.value import EdgeStatus, UserId
from kindred.persistence.database import store_call
from kindred.persistence.mappers import edge_to_dict, row_to_edge
from kindred.persistence.tables import interaction_edges_table as edges


class PostgresEdgeRepository(EdgeRepository):
    """PostgreSQL implementation of EdgeRepository.

    Conditional writes are a single statement: an INSERT guarded by the
    primary key when the edge was absent, otherwise an UPDATE whose WHERE
    clause carries the expected status.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    async def find(self, sender: UserId, receiver: UserId) -> InteractionEdge | None:
        """Find the edge for an ordered pair.

        Args:
            sender: Sending user
            receiver: Receiving user

        Returns:
            Edge if found, None otherwise
        """
        stmt = select(edges).where(
            and_(edges.c.sender == sender, edges.c.receiver == receiver)
        )
        async with store_call(self.session_factory, "edge.find") as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_edge(dict(row)) if row else None

    async def transition(
        self, edge: InteractionEdge, expected: EdgeStatus | None
    ) -> InteractionEdge:
        """Conditionally write an edge.

        Args:
            edge: Edge state to store
            expected: Last observed status, None when absent

        Returns:
            The stored edge

        Raises:
            ConflictError: If another writer got there first
        """
        values = edge_to_dict(edge)
        async with store_call(self.session_factory, "edge.transition") as session:
            if expected is None:
                try:
                    await session.execute(insert(edges).values(**values))
                except IntegrityError as e:
                    raise ConflictError("InteractionEdge", edge.key) from e
                return edge

            values.pop("created_at")
            stmt = (
                update(edges)
                .where(
                    and_(
                        edges.c.sender == edge.sender,
                        edges.c.receiver == edge.receiver,
                        edges.c.status == expected.value,
                    )
                )
                .values(**values)
                .returning(edges)
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
            if row is None:
                raise ConflictError("InteractionEdge", edge.key)
        return row_to_edge(dict(row))

    async def find_by_sender(
        self, sender: UserId, status: EdgeStatus | None = None, limit: int = 100
    ) -> list[InteractionEdge]:
        """List edges a user has sent, newest first.

        Args:
            sender: Sending user
            status: Optional status filter
            limit: Maximum number of results

        Returns:
            List of edges
        """
        stmt = (
            select(edges)
            .where(edges.c.sender == sender)
            .order_by(edges.c.updated_at.desc())
            .limit(limit)
        )
        if status:
            stmt = stmt.where(edges.c.status == status.value)

        async with store_call(self.session_factory, "edge.find_by_sender") as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_edge(dict(row)) for row in rows]

    async def find_by_receiver(
        self, receiver: UserId, status: EdgeStatus | None = None, limit: int = 100
    ) -> list[InteractionEdge]:
        """List edges aimed at a user, newest first.

        Args:
            receiver: Receiving user
            status: Optional status filter
            limit: Maximum number of results

        Returns:
            List of edges
        """
        stmt = (
            select(edges)
            .where(edges.c.receiver == receiver)
            .order_by(edges.c.updated_at.desc())
            .limit(limit)
        )
        if status:
            stmt = stmt.where(edges.c.status == status.value)

        async with store_call(
            self.session_factory, "edge.find_by_receiver"
        ) as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_edge(dict(row)) for row in rows]
