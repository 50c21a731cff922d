"""Unit tests for GetMutualRelationshipsUseCase."""

import pytest

from kindred.application.usecase.interaction import (
    CreateOrUpdateInteractionRequest,
    CreateOrUpdateInteractionUseCase,
)
from kindred.application.usecase.relationship import (
    GetMutualRelationshipsRequest,
    GetMutualRelationshipsUseCase,
)
from kindred.config import MatchingSettings
from kindred.domain.repository import ProfileRepository
from tests.conftest import add_profiles
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def like(use_case, sender, receiver):
    return await use_case.execute(
        CreateOrUpdateInteractionRequest(
            sender=sender, receiver=receiver, kind="like", action="like"
        )
    )


class TestGetMutualRelationships:
    """Tests for GetMutualRelationshipsUseCase."""

    @pytest.mark.asyncio
    async def test_lists_matches_with_preview(self, unit_env):
        """Each match should show the counterpart and the seed message preview."""
        # Arrange
        interaction = await unit_env.get(CreateOrUpdateInteractionUseCase)
        use_case = await unit_env.get(GetMutualRelationshipsUseCase)
        settings = await unit_env.get(MatchingSettings)
        await add_profiles(await unit_env.get(ProfileRepository), "alice", "bob")
        await like(interaction, "alice", "bob")
        matched = await like(interaction, "bob", "alice")

        # Act
        response = await use_case.execute(GetMutualRelationshipsRequest(user="alice"))

        # Assert
        assert response.total == 1
        item = response.relationships[0]
        assert item.relationship_id == matched.relationship_id
        assert item.counterpart.handle == "bob"
        assert item.last_message.content == settings.match_seed_message
        assert item.last_message.sender == "bob"
        assert item.last_message.is_unread is True

    @pytest.mark.asyncio
    async def test_pending_likes_are_not_relationships(self, unit_env):
        """One-sided likes should not be listed."""
        # Arrange
        interaction = await unit_env.get(CreateOrUpdateInteractionUseCase)
        use_case = await unit_env.get(GetMutualRelationshipsUseCase)
        await add_profiles(await unit_env.get(ProfileRepository), "bob")
        await like(interaction, "alice", "bob")

        # Act
        response = await use_case.execute(GetMutualRelationshipsRequest(user="alice"))

        # Assert
        assert response.relationships == []
