"""Create group invite use case."""

from datetime import datetime

from pydantic import BaseModel

from kindred.application.usecase.base import BaseUseCase
from kindred.domain.service import GroupInviteService
from kindred.domain.value import InviteStatus, UserId


class CreateGroupInviteRequest(BaseModel):
    """Create group invite request."""

    inviter: str  # Caller handle from the gateway
    approver: str
    invitee: str


class CreateGroupInviteResponse(BaseModel):
    """Create group invite response."""

    invite_id: str
    status: InviteStatus
    created_at: datetime


class CreateGroupInviteUseCase(BaseUseCase):
    """Use case for proposing a third user for a group."""

    def __init__(self, group_invite_service: GroupInviteService) -> None:
        """Initialize create group invite use case.

        Args:
            group_invite_service: Group invite service
        """
        self.group_invite_service = group_invite_service

    async def execute(
        self, request: CreateGroupInviteRequest
    ) -> CreateGroupInviteResponse:
        """Execute create group invite flow.

        Args:
            request: Create group invite request

        Returns:
            The pending invite

        Raises:
            ValidationError: If two roles share a user
            InvalidInviteeError: If the invitee has no profile
            AlreadyResolvedError: If the same invite was already approved
        """
        invite = await self.group_invite_service.create_invite(
            inviter=UserId(request.inviter),
            approver=UserId(request.approver),
            invitee=UserId(request.invitee),
        )
        return CreateGroupInviteResponse(
            invite_id=str(invite.id),
            status=invite.status,
            created_at=invite.created_at,
        )
