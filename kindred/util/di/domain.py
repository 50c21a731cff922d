"""Domain layer DI providers."""

from dishka import Scope, provide

from kindred.config import MatchingSettings
from kindred.domain.repository import (
    EdgeRepository,
    GroupInviteRepository,
    MessageRepository,
    ProfileRepository,
    RelationshipRepository,
)
from kindred.domain.service import (
    GroupInviteService,
    InteractionService,
    MutualIntentResolver,
    PingApprovalService,
    ProfileService,
    RelationshipMaterializer,
)
from kindred.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped; repositories open their own
    transaction per call, so services hold no connection state.
    """

    scope = Scope.REQUEST

    @provide
    def get_profile_service(
        self, profile_repository: ProfileRepository
    ) -> ProfileService:
        """Provide profile directory service."""
        return ProfileService(profile_repository=profile_repository)

    @provide
    def get_materializer(
        self,
        relationship_repository: RelationshipRepository,
        message_repository: MessageRepository,
    ) -> RelationshipMaterializer:
        """Provide relationship materializer."""
        return RelationshipMaterializer(
            relationship_repository=relationship_repository,
            message_repository=message_repository,
        )

    @provide
    def get_ping_service(
        self,
        edge_repository: EdgeRepository,
        materializer: RelationshipMaterializer,
        matching_settings: MatchingSettings,
    ) -> PingApprovalService:
        """Provide ping approval service."""
        return PingApprovalService(
            edge_repository=edge_repository,
            materializer=materializer,
            matching_settings=matching_settings,
        )

    @provide
    def get_resolver(
        self,
        edge_repository: EdgeRepository,
        materializer: RelationshipMaterializer,
        ping_service: PingApprovalService,
        matching_settings: MatchingSettings,
    ) -> MutualIntentResolver:
        """Provide mutual-intent resolver."""
        return MutualIntentResolver(
            edge_repository=edge_repository,
            materializer=materializer,
            ping_service=ping_service,
            matching_settings=matching_settings,
        )

    @provide
    def get_group_invite_service(
        self,
        invite_repository: GroupInviteRepository,
        profile_service: ProfileService,
        materializer: RelationshipMaterializer,
        matching_settings: MatchingSettings,
    ) -> GroupInviteService:
        """Provide group invite service."""
        return GroupInviteService(
            invite_repository=invite_repository,
            profile_service=profile_service,
            materializer=materializer,
            matching_settings=matching_settings,
        )

    @provide
    def get_interaction_service(
        self,
        edge_repository: EdgeRepository,
        message_repository: MessageRepository,
    ) -> InteractionService:
        """Provide interaction listing service."""
        return InteractionService(
            edge_repository=edge_repository, message_repository=message_repository
        )
