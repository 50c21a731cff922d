"""Group invite routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, status
from pydantic import BaseModel

from kindred.application.usecase.group import (
    CreateGroupInviteRequest,
    CreateGroupInviteResponse,
    CreateGroupInviteUseCase,
    GetActiveGroupsRequest,
    GetActiveGroupsResponse,
    GetActiveGroupsUseCase,
    GetPendingApprovalsRequest,
    GetPendingApprovalsResponse,
    GetPendingApprovalsUseCase,
    GetSentInvitesRequest,
    GetSentInvitesResponse,
    GetSentInvitesUseCase,
    RespondToGroupInviteRequest,
    RespondToGroupInviteResponse,
    RespondToGroupInviteUseCase,
)
from kindred.domain.error import DomainError
from kindred.interface.error import to_http_exception

router = APIRouter(prefix="/groups", tags=["groups"], route_class=DishkaRoute)


class CreateGroupInviteAPIRequest(BaseModel):
    """API request for proposing a group invite."""

    approver: str
    invitee: str


class RespondToGroupInviteAPIRequest(BaseModel):
    """API request for deciding on a group invite."""

    invitee: str
    status: str
    inviter: str | None = None


@router.post(
    "/invites",
    response_model=CreateGroupInviteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_group_invite(
    request: CreateGroupInviteAPIRequest,
    use_case: FromDishka[CreateGroupInviteUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
) -> CreateGroupInviteResponse:
    """Propose adding ``invitee`` to a group with the caller and ``approver``.

    Raises:
        HTTPException: 400 if roles overlap, 404 if the invitee is unknown,
            409 if the same invite was already approved
    """
    try:
        return await use_case.execute(
            CreateGroupInviteRequest(
                inviter=user_handle,
                approver=request.approver,
                invitee=request.invitee,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/invites/pending", response_model=GetPendingApprovalsResponse)
async def get_pending_approvals(
    use_case: FromDishka[GetPendingApprovalsUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
) -> GetPendingApprovalsResponse:
    """List invites waiting for the caller's decision, oldest first."""
    try:
        return await use_case.execute(GetPendingApprovalsRequest(approver=user_handle))
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("/invites/sent", response_model=GetSentInvitesResponse)
async def get_sent_invites(
    use_case: FromDishka[GetSentInvitesUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
) -> GetSentInvitesResponse:
    """List every invite the caller proposed, newest first."""
    try:
        return await use_case.execute(GetSentInvitesRequest(inviter=user_handle))
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/invites/respond", response_model=RespondToGroupInviteResponse)
async def respond_to_group_invite(
    request: RespondToGroupInviteAPIRequest,
    use_case: FromDishka[RespondToGroupInviteUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
) -> RespondToGroupInviteResponse:
    """Approve or decline an invite the caller must decide on.

    Raises:
        HTTPException: 400 for an invalid status, 404 if there is no such
            invite, 409 if it was already decided
    """
    try:
        return await use_case.execute(
            RespondToGroupInviteRequest(
                approver=user_handle,
                invitee=request.invitee,
                status=request.status,
                inviter=request.inviter,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.get("", response_model=GetActiveGroupsResponse)
async def get_active_groups(
    use_case: FromDishka[GetActiveGroupsUseCase],
    user_handle: str = Header(alias="X-User-Handle"),
) -> GetActiveGroupsResponse:
    """List the groups the caller belongs to."""
    try:
        return await use_case.execute(GetActiveGroupsRequest(user=user_handle))
    except DomainError as e:
        raise to_http_exception(e) from e
