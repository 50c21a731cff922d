"""Get sent invites use case."""

from pydantic import BaseModel

from kindred.domain.service import GroupInviteService
from kindred.domain.value import UserId

from .get_pending_approvals import InviteItem


class GetSentInvitesRequest(BaseModel):
    """Get sent invites request."""

    inviter: str  # Caller handle from the gateway


class GetSentInvitesResponse(BaseModel):
    """Get sent invites response."""

    invites: list[InviteItem]
    total: int


class GetSentInvitesUseCase:
    """Use case for listing every invite the caller proposed."""

    def __init__(self, group_invite_service: GroupInviteService) -> None:
        self.group_invite_service = group_invite_service

    async def execute(self, request: GetSentInvitesRequest) -> GetSentInvitesResponse:
        invites = await self.group_invite_service.list_sent_invites(
            UserId(request.inviter)
        )
        items = [InviteItem.from_invite(invite) for invite in invites]
        return GetSentInvitesResponse(invites=items, total=len(items))
