"""Decline ping use case."""

from pydantic import BaseModel

from kindred.domain.service import PingApprovalService
from kindred.domain.value import EdgeStatus, UserId


class DeclinePingRequest(BaseModel):
    """Decline ping request."""

    pinger: str
    approver: str  # Caller handle from the gateway


class DeclinePingResponse(BaseModel):
    """Decline ping response."""

    status: EdgeStatus


class DeclinePingUseCase:
    """Use case for refusing a ping."""

    def __init__(self, ping_service: PingApprovalService) -> None:
        self.ping_service = ping_service

    async def execute(self, request: DeclinePingRequest) -> DeclinePingResponse:
        resolution = await self.ping_service.decline(
            pinger=UserId(request.pinger), approver=UserId(request.approver)
        )
        return DeclinePingResponse(status=resolution.status)
