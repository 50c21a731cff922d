"""Interaction routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query
from pydantic import BaseModel

from kindred.application.usecase.interaction import (
    ApprovePingRequest,
    ApprovePingResponse,
    ApprovePingUseCase,
    CreateOrUpdateInteractionRequest,
    CreateOrUpdateInteractionResponse,
    CreateOrUpdateInteractionUseCase,
    DeclinePingRequest,
    DeclinePingResponse,
    DeclinePingUseCase,
    GetReceivedInteractionsRequest,
    GetReceivedInteractionsResponse,
    GetReceivedInteractionsUseCase,
    GetSentInteractionsRequest,
    GetSentInteractionsResponse,
    GetSentInteractionsUseCase,
)
from kindred.domain.error import DomainError
from kindred.interface.error import to_http_exception

router = APIRouter(
    prefix="/interactions", tags=["interactions"], route_class=DishkaRoute
)


class CreateInteractionAPIRequest(BaseModel):
    """API request for recording an interaction."""

    receiver: str
    kind: str
    action: str
    message: str | None = None


@router.post("", response_model=CreateOrUpdateInteractionResponse)
async def create_or_update_interaction(
    request: CreateInteractionAPIRequest,
    use_case: FromDishka[CreateOrUpdateInteractionUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
) -> CreateOrUpdateInteractionResponse:
    """Record the caller's intent toward another user.

    Args:
        request: Receiver, kind, action and optional ping message
        use_case: Create or update interaction use case from DI
        user_handle: Caller handle injected by the gateway

    Returns:
        Resulting status and, on a match, the relationship and counterpart

    Raises:
        HTTPException: 400 for invalid or unsupported actions, 503 if the
            store is unavailable
    """
    try:
        return await use_case.execute(
            CreateOrUpdateInteractionRequest(
                sender=user_handle,
                receiver=request.receiver,
                kind=request.kind,
                action=request.action,
                message=request.message,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/pings/{sender}/approve", response_model=ApprovePingResponse)
async def approve_ping(
    sender: str,
    use_case: FromDishka[ApprovePingUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
) -> ApprovePingResponse:
    """Approve a ping the caller received from ``sender``.

    Raises:
        HTTPException: 404 if there is no such ping, 409 if already decided
    """
    try:
        return await use_case.execute(
            ApprovePingRequest(pinger=sender, approver=user_handle)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/pings/{sender}/decline", response_model=DeclinePingResponse)
async def decline_ping(
    sender: str,
    use_case: FromDishka[DeclinePingUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
) -> DeclinePingResponse:
    """Decline a ping the caller received from ``sender``.

    Raises:
        HTTPException: 404 if there is no such ping, 409 if already decided
    """
    try:
        return await use_case.execute(
            DeclinePingRequest(pinger=sender, approver=user_handle)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/sent", response_model=GetSentInteractionsResponse)
async def get_sent_interactions(
    use_case: FromDishka[GetSentInteractionsUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
    limit: int = Query(default=100, ge=1, le=500),
) -> GetSentInteractionsResponse:
    """List interactions the caller sent, newest first."""
    try:
        return await use_case.execute(
            GetSentInteractionsRequest(user=user_handle, limit=limit)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/received", response_model=GetReceivedInteractionsResponse)
async def get_received_interactions(
    use_case: FromDishka[GetReceivedInteractionsUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
    limit: int = Query(default=100, ge=1, le=500),
) -> GetReceivedInteractionsResponse:
    """List interactions the caller received, newest first."""
    try:
        return await use_case.execute(
            GetReceivedInteractionsRequest(user=user_handle, limit=limit)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
