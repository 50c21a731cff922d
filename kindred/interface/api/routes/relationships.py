"""Relationship routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header

from kindred.application.usecase.relationship import (
    GetMutualRelationshipsRequest,
    GetMutualRelationshipsResponse,
    GetMutualRelationshipsUseCase,
)
from kindred.domain.error import DomainError
from kindred.interface.error import to_http_exception

router = APIRouter(
    prefix="/relationships", tags=["relationships"], route_class=DishkaRoute
)


@router.get("", response_model=GetMutualRelationshipsResponse)
async def get_mutual_relationships(
    use_case: FromDishka[GetMutualRelationshipsUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
) -> GetMutualRelationshipsResponse:
    """List the caller's matches with a preview of each conversation.

    Args:
        use_case: Get mutual relationships use case from DI
        user_handle: Caller handle injected by the gateway

    Returns:
        Matches, newest first
    """
    try:
        return await use_case.execute(GetMutualRelationshipsRequest(user=user_handle))
    except DomainError as e:
        raise to_http_exception(e) from e
