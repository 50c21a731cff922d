"""In-memory interaction edge repository for testing."""

import asyncio

from kindred.domain.error import ConflictError
from kindred.domain.model.edge import InteractionEdge
from kindred.domain.repository.edge import EdgeRepository
from kindred.domain.value import EdgeStatus, UserId


class InMemoryEdgeRepository(EdgeRepository):
    """In-memory implementation of EdgeRepository for testing.

    Every call yields to the event loop first, like a store round trip,
    so concurrent requests interleave between reads and writes.
    """

    def __init__(self) -> None:
        self._edges: dict[tuple[UserId, UserId], InteractionEdge] = {}

    async def find(self, sender: UserId, receiver: UserId) -> InteractionEdge | None:
        """Find the edge for an ordered pair."""
        await asyncio.sleep(0)
        return self._edges.get((sender, receiver))

    async def transition(
        self, edge: InteractionEdge, expected: EdgeStatus | None
    ) -> InteractionEdge:
        """Store the edge if the current status matches ``expected``.

        Raises:
            ConflictError: If the stored status differs
        """
        await asyncio.sleep(0)
        key = (edge.sender, edge.receiver)
        current = self._edges.get(key)
        current_status = current.status if current else None
        if current_status != expected:
            raise ConflictError("InteractionEdge", edge.key)
        if current is not None:
            edge = edge.model_copy(update={"created_at": current.created_at})
        self._edges[key] = edge
        return edge

    async def find_by_sender(
        self, sender: UserId, status: EdgeStatus | None = None, limit: int = 100
    ) -> list[InteractionEdge]:
        """List edges a user has sent, newest first."""
        await asyncio.sleep(0)
        matches = [
            edge
            for edge in self._edges.values()
            if edge.sender == sender and (status is None or edge.status == status)
        ]
        matches.sort(key=lambda e: e.updated_at, reverse=True)
        return matches[:limit]

    async def find_by_receiver(
        self, receiver: UserId, status: EdgeStatus | None = None, limit: int = 100
    ) -> list[InteractionEdge]:
        """List edges aimed at a user, newest first."""
        await asyncio.sleep(0)
        matches = [
            edge
            for edge in self._edges.values()
            if edge.receiver == receiver and (status is None or edge.status == status)
        ]
        matches.sort(key=lambda e: e.updated_at, reverse=True)
        return matches[:limit]
