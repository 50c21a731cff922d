"""Group invite use cases."""

from .create_group_invite import (
    CreateGroupInviteRequest,
    CreateGroupInviteResponse,
    CreateGroupInviteUseCase,
)
from .get_active_groups import (
    GetActiveGroupsRequest,
    GetActiveGroupsResponse,
    GetActiveGroupsUseCase,
    GroupItem,
)
from .get_pending_approvals import (
    GetPendingApprovalsRequest,
    GetPendingApprovalsResponse,
    GetPendingApprovalsUseCase,
    InviteItem,
)
from .get_sent_invites import (
    GetSentInvitesRequest,
    GetSentInvitesResponse,
    GetSentInvitesUseCase,
)
from .respond_to_group_invite import (
    RespondToGroupInviteRequest,
    RespondToGroupInviteResponse,
    RespondToGroupInviteUseCase,
)

__all__ = [
    "CreateGroupInviteRequest",
    "CreateGroupInviteResponse",
    "CreateGroupInviteUseCase",
    "GetActiveGroupsRequest",
    "GetActiveGroupsResponse",
    "GetActiveGroupsUseCase",
    "GroupItem",
    "GetPendingApprovalsRequest",
    "GetPendingApprovalsResponse",
    "GetPendingApprovalsUseCase",
    "InviteItem",
    "GetSentInvitesRequest",
    "GetSentInvitesResponse",
    "GetSentInvitesUseCase",
    "RespondToGroupInviteRequest",
    "RespondToGroupInviteResponse",
    "RespondToGroupInviteUseCase",
]
