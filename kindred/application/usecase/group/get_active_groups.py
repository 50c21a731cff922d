"""Get active groups use case."""

from datetime import datetime

from pydantic import BaseModel

from kindred.domain.service import GroupInviteService
from kindred.domain.value import UserId


class GroupItem(BaseModel):
    """Active group the caller belongs to."""

    relationship_id: str
    members: list[str]
    inviter: str
    approver: str
    invitee: str
    joined_at: datetime


class GetActiveGroupsRequest(BaseModel):
    """Get active groups request."""

    user: str  # Caller handle from the gateway


class GetActiveGroupsResponse(BaseModel):
    """Get active groups response."""

    groups: list[GroupItem]
    total: int


class GetActiveGroupsUseCase:
    """Use case for listing the groups a user is a member of."""

    def __init__(self, group_invite_service: GroupInviteService) -> None:
        """Initialize get active groups use case.

        Args:
            group_invite_service: Group invite service
        """
        self.group_invite_service = group_invite_service

    async def execute(self, request: GetActiveGroupsRequest) -> GetActiveGroupsResponse:
        """Execute get active groups flow.

        Args:
            request: Get active groups request

        Returns:
            Active groups, newest first
        """
        records = await self.group_invite_service.list_active_groups(
            UserId(request.user)
        )
        groups = [
            GroupItem(
                relationship_id=str(record.relationship_id),
                members=list(record.members),
                inviter=record.inviter,
                approver=record.approver,
                invitee=record.invitee,
                joined_at=record.created_at,
            )
            for record in records
            if record.relationship_id is not None
        ]
        return GetActiveGroupsResponse(groups=groups, total=len(groups))
