"""Interaction edge repository interface."""

from abc import ABC, abstractmethod

from kindred.domain.model.edge import InteractionEdge
from kindred.domain.value import EdgeStatus, UserId


class EdgeRepository(ABC):
    """Repository for InteractionEdge entity.

    Reads by (sender, receiver) are strongly consistent. Listing queries go
    through secondary indexes and may lag behind concurrent writes.
    """

    @abstractmethod
    async def find(self, sender: UserId, receiver: UserId) -> InteractionEdge | None:
        """Find the edge for an ordered pair.

        Args:
            sender: User the intent comes from
            receiver: User the intent is aimed at

        Returns:
            The edge if one was ever written, None otherwise
        """
        pass

    @abstractmethod
    async def transition(
        self, edge: InteractionEdge, expected: EdgeStatus | None
    ) -> InteractionEdge:
        """Write an edge only if the stored one is still in the expected status.

        Args:
            edge: Edge state to store
            expected: Last observed status, None when the edge was absent

        Returns:
            The stored edge

        Raises:
            ConflictError: If the stored status no longer matches ``expected``
            StoreUnavailableError: If the store fails or times out
        """
        pass

    @abstractmethod
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
        pass

    @abstractmethod
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
        pass
