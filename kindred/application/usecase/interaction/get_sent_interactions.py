"""Get sent interactions use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from kindred.domain.service import InteractionService, ProfileService
from kindred.domain.value import (
    EdgeStatus,
    InteractionKind,
    ProfileSummary,
    UserId,
)


class InteractionItem(BaseModel):
    """Interaction edge with the other user's summary."""

    counterpart: ProfileSummary
    kind: InteractionKind
    status: EdgeStatus
    message: str | None = None
    relationship_id: str | None = None
    created_at: datetime
    updated_at: datetime


class GetSentInteractionsRequest(BaseModel):
    """Get sent interactions request."""

    user: str  # Caller handle from the gateway
    limit: int = Field(default=100, ge=1, le=500)


class GetSentInteractionsResponse(BaseModel):
    """Get sent interactions response."""

    interactions: list[InteractionItem]
    total: int


class GetSentInteractionsUseCase:
    """Use case for listing the intents a user expressed, newest first."""

    def __init__(
        self,
        interaction_service: InteractionService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize get sent interactions use case.

        Args:
            interaction_service: Interaction listing service
            profile_service: Profile directory service
        """
        self.interaction_service = interaction_service
        self.profile_service = profile_service

    async def execute(
        self, request: GetSentInteractionsRequest
    ) -> GetSentInteractionsResponse:
        """Execute get sent interactions flow.

        Edges whose receiver has no profile are left out.
        """
        edges = await self.interaction_service.list_sent(
            UserId(request.user), limit=request.limit
        )
        summaries = await self.profile_service.get_summaries(
            [edge.receiver for edge in edges]
        )

        items = [
            InteractionItem(
                counterpart=summaries[edge.receiver],
                kind=edge.kind,
                status=edge.status,
                message=edge.message,
                relationship_id=(
                    str(edge.relationship_id) if edge.relationship_id else None
                ),
                created_at=edge.created_at,
                updated_at=edge.updated_at,
            )
            for edge in edges
            if edge.receiver in summaries
        ]
        return GetSentInteractionsResponse(interactions=items, total=len(items))
