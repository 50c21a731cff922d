"""Application layer DI providers."""

from dishka import Scope, provide

from kindred.application.usecase.group import (
    CreateGroupInviteUseCase,
    GetActiveGroupsUseCase,
    GetPendingApprovalsUseCase,
    GetSentInvitesUseCase,
    RespondToGroupInviteUseCase,
)
from kindred.application.usecase.interaction import (
    ApprovePingUseCase,
    CreateOrUpdateInteractionUseCase,
    DeclinePingUseCase,
    GetReceivedInteractionsUseCase,
    GetSentInteractionsUseCase,
)
from kindred.application.usecase.relationship import GetMutualRelationshipsUseCase
from kindred.domain.service import (
    GroupInviteService,
    InteractionService,
    MutualIntentResolver,
    PingApprovalService,
    ProfileService,
)
from kindred.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Interaction use cases
    @provide(scope=Scope.REQUEST)
    def get_create_or_update_interaction_use_case(
        self, resolver: MutualIntentResolver, profile_service: ProfileService
    ) -> CreateOrUpdateInteractionUseCase:
        """Provide create or update interaction use case."""
        return CreateOrUpdateInteractionUseCase(
            resolver=resolver, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_approve_ping_use_case(
        self, ping_service: PingApprovalService
    ) -> ApprovePingUseCase:
        """Provide approve ping use case."""
        return ApprovePingUseCase(ping_service=ping_service)

    @provide(scope=Scope.REQUEST)
    def get_decline_ping_use_case(
        self, ping_service: PingApprovalService
    ) -> DeclinePingUseCase:
        """Provide decline ping use case."""
        return DeclinePingUseCase(ping_service=ping_service)

    @provide(scope=Scope.REQUEST)
    def get_get_sent_interactions_use_case(
        self,
        interaction_service: InteractionService,
        profile_service: ProfileService,
    ) -> GetSentInteractionsUseCase:
        """Provide get sent interactions use case."""
        return GetSentInteractionsUseCase(
            interaction_service=interaction_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_received_interactions_use_case(
        self,
        interaction_service: InteractionService,
        profile_service: ProfileService,
    ) -> GetReceivedInteractionsUseCase:
        """Provide get received interactions use case."""
        return GetReceivedInteractionsUseCase(
            interaction_service=interaction_service, profile_service=profile_service
        )

    # Relationship use cases
    @provide(scope=Scope.REQUEST)
    def get_get_mutual_relationships_use_case(
        self,
        interaction_service: InteractionService,
        profile_service: ProfileService,
    ) -> GetMutualRelationshipsUseCase:
        """Provide get mutual relationships use case."""
        return GetMutualRelationshipsUseCase(
            interaction_service=interaction_service, profile_service=profile_service
        )

    # Group use cases
    @provide(scope=Scope.REQUEST)
    def get_create_group_invite_use_case(
        self, group_invite_service: GroupInviteService
    ) -> CreateGroupInviteUseCase:
        """Provide create group invite use case."""
        return CreateGroupInviteUseCase(group_invite_service=group_invite_service)

    @provide(scope=Scope.REQUEST)
    def get_get_pending_approvals_use_case(
        self,
        group_invite_service: GroupInviteService,
        profile_service: ProfileService,
    ) -> GetPendingApprovalsUseCase:
        """Provide get pending approvals use case."""
        return GetPendingApprovalsUseCase(
            group_invite_service=group_invite_service, profile_service=profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_sent_invites_use_case(
        self, group_invite_service: GroupInviteService
    ) -> GetSentInvitesUseCase:
        """Provide get sent invites use case."""
        return GetSentInvitesUseCase(group_invite_service=group_invite_service)

    @provide(scope=Scope.REQUEST)
    def get_respond_to_group_invite_use_case(
        self, group_invite_service: GroupInviteService
    ) -> RespondToGroupInviteUseCase:
        """Provide respond to group invite use case."""
        return RespondToGroupInviteUseCase(group_invite_service=group_invite_service)

    @provide(scope=Scope.REQUEST)
    def get_get_active_groups_use_case(
        self, group_invite_service: GroupInviteService
    ) -> GetActiveGroupsUseCase:
        """Provide get active groups use case."""
        return GetActiveGroupsUseCase(group_invite_service=group_invite_service)
