"""Get mutual relationships use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from kindred.domain.service import InteractionService, ProfileService
from kindred.domain.value import ProfileSummary, UserId


class LastMessagePreview(BaseModel):
    """Most recent message of a relationship."""

    content: str
    sender: str
    is_unread: bool
    created_at: datetime


class RelationshipItem(BaseModel):
    """Match with the other member and a preview of the conversation."""

    relationship_id: str
    counterpart: ProfileSummary
    last_message: LastMessagePreview | None = None
    matched_at: datetime


class GetMutualRelationshipsRequest(BaseModel):
    """Get mutual relationships request."""

    user: str  # Caller handle from the gateway


class GetMutualRelationshipsResponse(BaseModel):
    """Get mutual relationships response."""

    relationships: list[RelationshipItem]
    total: int


class GetMutualRelationshipsUseCase:
    """Use case for listing a user's private matches."""

    def __init__(
        self,
        interaction_service: InteractionService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize get mutual relationships use case.

        Args:
            interaction_service: Interaction listing service
            profile_service: Profile directory service
        """
        self.interaction_service = interaction_service
        self.profile_service = profile_service

    async def execute(
        self, request: GetMutualRelationshipsRequest
    ) -> GetMutualRelationshipsResponse:
        """Execute get mutual relationships flow.

        Args:
            request: Get mutual relationships request

        Returns:
            Matches newest first; counterparts without a profile are left out
        """
        user = UserId(request.user)
        matches = await self.interaction_service.list_matches(user)
        summaries = await self.profile_service.get_summaries(
            [edge.receiver for edge in matches]
        )

        items = []
        seen = set()
        for edge in matches:
            if edge.receiver not in summaries or edge.relationship_id in seen:
                continue
            seen.add(edge.relationship_id)

            preview = None
            message = await self.interaction_service.last_message(edge.relationship_id)
            if message is not None:
                preview = LastMessagePreview(
                    content=message.content,
                    sender=message.sender,
                    is_unread=message.is_unread,
                    created_at=message.created_at,
                )

            items.append(
                RelationshipItem(
                    relationship_id=str(edge.relationship_id),
                    counterpart=summaries[edge.receiver],
                    last_message=preview,
                    matched_at=edge.updated_at,
                )
            )

        logfire.info("Mutual relationships listed", user=user, count=len(items))
        return GetMutualRelationshipsResponse(relationships=items, total=len(items))
