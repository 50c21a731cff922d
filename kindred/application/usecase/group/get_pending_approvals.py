"""Get pending approvals use case."""

from datetime import datetime

from pydantic import BaseModel

from kindred.domain.model import GroupInvite
from kindred.domain.service import GroupInviteService, ProfileService
from kindred.domain.value import InviteStatus, ProfileSummary, UserId


class InviteItem(BaseModel):
    """Group invite in response."""

    invite_id: str
    inviter: str
    approver: str
    invitee: str
    status: InviteStatus
    relationship_id: str | None = None
    invitee_profile: ProfileSummary | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_invite(
        cls, invite: GroupInvite, invitee_profile: ProfileSummary | None = None
    ) -> "InviteItem":
        return cls(
            invite_id=str(invite.id),
            inviter=invite.inviter,
            approver=invite.approver,
            invitee=invite.invitee,
            status=invite.status,
            relationship_id=(
                str(invite.relationship_id) if invite.relationship_id else None
            ),
            invitee_profile=invitee_profile,
            created_at=invite.created_at,
            updated_at=invite.updated_at,
        )


class GetPendingApprovalsRequest(BaseModel):
    """Get pending approvals request."""

    approver: str  # Caller handle from the gateway


class GetPendingApprovalsResponse(BaseModel):
    """Get pending approvals response."""

    invites: list[InviteItem]
    total: int


class GetPendingApprovalsUseCase:
    """Use case for listing invites waiting for the caller's decision."""

    def __init__(
        self,
        group_invite_service: GroupInviteService,
        profile_service: ProfileService,
    ) -> None:
        """Initialize get pending approvals use case.

        Args:
            group_invite_service: Group invite service
            profile_service: Profile directory service
        """
        self.group_invite_service = group_invite_service
        self.profile_service = profile_service

    async def execute(
        self, request: GetPendingApprovalsRequest
    ) -> GetPendingApprovalsResponse:
        """Execute get pending approvals flow.

        Args:
            request: Get pending approvals request

        Returns:
            Pending invites oldest first, each with the invitee's summary
        """
        invites = await self.group_invite_service.list_pending_approvals(
            UserId(request.approver)
        )
        summaries = await self.profile_service.get_summaries(
            [invite.invitee for invite in invites]
        )

        items = [
            InviteItem.from_invite(invite, summaries.get(invite.invitee))
            for invite in invites
        ]
        return GetPendingApprovalsResponse(invites=items, total=len(items))
