"""Get received interactions use case."""

from pydantic import BaseModel, Field

from kindred.domain.service import InteractionService, ProfileService
from kindred.domain.value import UserId

from .get_sent_interactions import InteractionItem


class GetReceivedInteractionsRequest(BaseModel):
    """Get received interactions request."""

    user: str  # Caller handle from the gateway
    limit: int = Field(default=100, ge=1, le=500)


class GetReceivedInteractionsResponse(BaseModel):
    """Get received interactions response."""

    interactions: list[InteractionItem]
    total: int


class GetReceivedInteractionsUseCase:
    """Use case for listing the intents others expressed toward a user."""

    def __init__(
        self,
        interaction_service: InteractionService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize get received interactions use case.

        Args:
            interaction_service: Interaction listing service
            profile_service: Profile directory service
        """
        self.interaction_service = interaction_service
        self.profile_service = profile_service

    async def execute(
        self, request: GetReceivedInteractionsRequest
    ) -> GetReceivedInteractionsResponse:
        """Execute get received interactions flow.

        Edges whose sender has no profile are left out.
        """
        edges = await self.interaction_service.list_received(
            UserId(request.user), limit=request.limit
        )
        summaries = await self.profile_service.get_summaries(
            [edge.sender for edge in edges]
        )

        items = [
            InteractionItem(
                counterpart=summaries[edge.sender],
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
            if edge.sender in summaries
        ]
        return GetReceivedInteractionsResponse(interactions=items, total=len(items))
