"""Approve ping use case."""

from pydantic import BaseModel

from kindred.domain.service import PingApprovalService
from kindred.domain.value import EdgeStatus, UserId


class ApprovePingRequest(BaseModel):
    """Approve ping request."""

    pinger: str
    approver: str  # Caller handle from the gateway


class ApprovePingResponse(BaseModel):
    """Approve ping response."""

    status: EdgeStatus
    relationship_id: str | None = None


class ApprovePingUseCase:
    """Use case for accepting a ping."""

    def __init__(self, ping_service: PingApprovalService) -> None:
        """Initialize approve ping use case.

        Args:
            ping_service: Ping approval service
        """
        self.ping_service = ping_service

    async def execute(self, request: ApprovePingRequest) -> ApprovePingResponse:
        """Execute approve ping flow.

        Raises:
            NotFoundError: If there is no ping from the pinger
            AlreadyResolvedError: If the ping was already decided
        """
        resolution = await self.ping_service.approve(
            pinger=UserId(request.pinger), approver=UserId(request.approver)
        )
        return ApprovePingResponse(
            status=resolution.status,
            relationship_id=(
                str(resolution.relationship_id) if resolution.relationship_id else None
            ),
        )
