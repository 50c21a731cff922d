"""Respond to group invite use case."""

from pydantic import BaseModel

from kindred.domain.service import GroupInviteService
from kindred.domain.value import EdgeStatus, UserId


class RespondToGroupInviteRequest(BaseModel):
    """Approve or decline group invite request."""

    approver: str  # Caller handle from the gateway
    invitee: str
    status: str  # "approved" or "declined"
    inviter: str | None = None  # Picks one proposal when several inviters exist


class RespondToGroupInviteResponse(BaseModel):
    """Approve or decline group invite response."""

    status: EdgeStatus
    relationship_id: str | None = None


class RespondToGroupInviteUseCase:
    """Use case for deciding on a group invite."""

    def __init__(self, group_invite_service: GroupInviteService) -> None:
        """Initialize respond to group invite use case.

        Args:
            group_invite_service: Group invite service
        """
        self.group_invite_service = group_invite_service

    async def execute(
        self, request: RespondToGroupInviteRequest
    ) -> RespondToGroupInviteResponse:
        """Execute respond flow.

        Args:
            request: Respond request

        Returns:
            Resulting invite status, with the group id on approval

        Raises:
            ValidationError: If the status is not approved or declined
            NotFoundError: If the caller has no such invite to decide
            AlreadyResolvedError: If the invite was already decided
        """
        resolution = await self.group_invite_service.respond(
            approver=UserId(request.approver),
            invitee=UserId(request.invitee),
            status=request.status,
            inviter=UserId(request.inviter) if request.inviter else None,
        )
        return RespondToGroupInviteResponse(
            status=resolution.status,
            relationship_id=(
                str(resolution.relationship_id) if resolution.relationship_id else None
            ),
        )
