"""Create or update interaction use case."""

from pydantic import BaseModel

from kindred.application.usecase.base import BaseUseCase
from kindred.domain.service import MutualIntentResolver, ProfileService
from kindred.domain.value import EdgeStatus, ProfileSummary, UserId


class CreateOrUpdateInteractionRequest(BaseModel):
    """Create or update interaction request."""

    sender: str  # Caller handle from the gateway
    receiver: str
    kind: str
    action: str
    message: str | None = None


class CreateOrUpdateInteractionResponse(BaseModel):
    """Create or update interaction response."""

    status: EdgeStatus
    relationship_id: str | None = None
    matched_user: ProfileSummary | None = None  # Set when a relationship opened


class CreateOrUpdateInteractionUseCase(BaseUseCase):
    """Use case for recording one user's intent toward another."""

    def __init__(
        self, resolver: MutualIntentResolver, profile_service: ProfileService
    ) -> None:
        """Initialize create or update interaction use case.

        Args:
            resolver: Mutual-intent resolver
            profile_service: Profile directory service
        """
        self.resolver = resolver
        self.profile_service = profile_service

    async def execute(
        self, request: CreateOrUpdateInteractionRequest
    ) -> CreateOrUpdateInteractionResponse:
        """Execute the interaction flow.

        Args:
            request: Interaction request

        Returns:
            Resulting edge status, with the relationship and counterpart
            summary on a match

        Raises:
            ValidationError: If the handles are blank or equal
            UnsupportedActionError: If the action or kind is not accepted
        """
        sender = UserId(request.sender)
        receiver = UserId(request.receiver)

        resolution = await self.resolver.resolve(
            sender=sender,
            receiver=receiver,
            kind=request.kind,
            action=request.action,
            message=request.message,
        )

        matched_user = None
        if resolution.status == EdgeStatus.MATCH:
            summaries = await self.profile_service.get_summaries([receiver])
            matched_user = summaries.get(receiver)

        return CreateOrUpdateInteractionResponse(
            status=resolution.status,
            relationship_id=(
                str(resolution.relationship_id) if resolution.relationship_id else None
            ),
            matched_user=matched_user,
        )
