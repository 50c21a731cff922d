"""Interaction listing domain service."""

import logfire

from kindred.domain.model import InteractionEdge, Message
from kindred.domain.repository import EdgeRepository, MessageRepository
from kindred.domain.value import EdgeStatus, RelationshipId, UserId


class InteractionService:
    """Read side of interaction edges and the matches they produced."""

    def __init__(
        self,
        edge_repository: EdgeRepository,
        message_repository: MessageRepository,
    ) -> None:
        """Initialize interaction service.

        Args:
            edge_repository: Interaction edge repository
            message_repository: Message repository
        """
        self.edge_repository = edge_repository
        self.message_repository = message_repository

    async def list_sent(self, user: UserId, limit: int = 100) -> list[InteractionEdge]:
        """List edges a user sent, newest first."""
        with logfire.span("interaction_service.list_sent", user=user):
            edges = await self.edge_repository.find_by_sender(user, limit=limit)
            logfire.info("Sent interactions listed", user=user, count=len(edges))
            return edges

    async def list_received(
        self, user: UserId, limit: int = 100
    ) -> list[InteractionEdge]:
        """List edges a user received, newest first."""
        with logfire.span("interaction_service.list_received", user=user):
            edges = await self.edge_repository.find_by_receiver(user, limit=limit)
            logfire.info("Received interactions listed", user=user, count=len(edges))
            return edges

    async def list_matches(self, user: UserId) -> list[InteractionEdge]:
        """List a user's outgoing edges that resolved into a relationship.

        Args:
            user: User handle

        Returns:
            Matched edges carrying a relationship id, newest first
        """
        with logfire.span("interaction_service.list_matches", user=user):
            edges = await self.edge_repository.find_by_sender(
                user, status=EdgeStatus.MATCH
            )
            matches = [edge for edge in edges if edge.relationship_id is not None]
            logfire.info("Matches listed", user=user, count=len(matches))
            return matches

    async def last_message(self, relationship_id: RelationshipId) -> Message | None:
        messages = await self.message_repository.find_by_relationship(
            relationship_id, limit=1
        )
        return messages[0] if messages else None
