"""Domain services."""

from .base import Service
from .group_invite_service import GroupInviteService
from .interaction_service import InteractionService
from .materializer import RelationshipMaterializer
from .ping_service import PingApprovalService
from .profile_service import ProfileService
from .resolver import MutualIntentResolver

__all__ = [
    "GroupInviteService",
    "InteractionService",
    "MutualIntentResolver",
    "PingApprovalService",
    "ProfileService",
    "RelationshipMaterializer",
    "Service",
]
