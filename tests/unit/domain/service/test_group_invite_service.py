"""Unit tests for GroupInviteService."""

from uuid import uuid4

import pytest

from kindred.config import MatchingSettings
from kindred.domain.error import (
    AlreadyResolvedError,
    InvalidInviteeError,
    NotFoundError,
    ValidationError,
)
from kindred.domain.model.invite import group_key
from kindred.domain.repository import (
    GroupInviteRepository,
    MessageRepository,
    ProfileRepository,
    RelationshipRepository,
)
from kindred.domain.service import GroupInviteService
from kindred.domain.value import (
    EdgeStatus,
    InviteRecordType,
    InviteStatus,
    RelationshipId,
    RelationshipKind,
    UserId,
)
from tests.conftest import add_profiles
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

INVITER = UserId("ana")
APPROVER = UserId("ben")
INVITEE = UserId("cleo")


class TestCreateInvite:
    """Tests for create_invite method."""

    @pytest.mark.asyncio
    async def test_create_invite_success(self, unit_env):
        """Creating an invite for a known user should store a pending proposal."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)

        # Act
        invite = await service.create_invite(INVITER, APPROVER, INVITEE)

        # Assert
        assert invite.status == InviteStatus.PENDING
        assert invite.record_type == InviteRecordType.PROPOSAL
        assert (invite.inviter, invite.approver, invite.invitee) == (
            INVITER,
            APPROVER,
            INVITEE,
        )
        assert invite.relationship_id is None

    @pytest.mark.asyncio
    async def test_unknown_invitee_writes_nothing(self, unit_env):
        """An invitee without a profile should fail before any write."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        invite_repo = await unit_env.get(GroupInviteRepository)

        # Act & Assert
        with pytest.raises(InvalidInviteeError):
            await service.create_invite(INVITER, APPROVER, INVITEE)

        assert await invite_repo.find_by_approver(APPROVER) == []
        assert (
            await invite_repo.find_by_subject(INVITER, InviteRecordType.PROPOSAL) == []
        )

    @pytest.mark.asyncio
    async def test_duplicate_pending_invite_returns_existing(self, unit_env):
        """Proposing the same invitee again while pending should return the pending invite."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)
        first = await service.create_invite(INVITER, APPROVER, INVITEE)

        # Act
        second = await service.create_invite(INVITER, APPROVER, INVITEE)

        # Assert
        assert second.id == first.id
        assert len(await service.list_sent_invites(INVITER)) == 1

    @pytest.mark.asyncio
    async def test_declined_invite_can_be_proposed_again(self, unit_env):
        """A declined proposal should be replaced by a new pending one."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)
        first = await service.create_invite(INVITER, APPROVER, INVITEE)
        await service.respond(APPROVER, INVITEE, "declined")

        # Act
        second = await service.create_invite(INVITER, APPROVER, INVITEE)

        # Assert
        assert second.id != first.id
        assert second.status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_approved_invite_cannot_be_proposed_again(self, unit_env):
        """Re-proposing an approved invite should raise AlreadyResolvedError."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)
        await service.create_invite(INVITER, APPROVER, INVITEE)
        await service.respond(APPROVER, INVITEE, "approved")

        # Act & Assert
        with pytest.raises(AlreadyResolvedError):
            await service.create_invite(INVITER, APPROVER, INVITEE)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "inviter,approver,invitee",
        [("ana", "ana", "cleo"), ("ana", "ben", "ana"), ("ana", "ben", "ben")],
    )
    async def test_roles_must_be_distinct(self, unit_env, inviter, approver, invitee):
        """Any two roles held by the same user should be a validation error."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        await add_profiles(await unit_env.get(ProfileRepository), "ana", "ben", "cleo")

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.create_invite(
                UserId(inviter), UserId(approver), UserId(invitee)
            )


class TestRespond:
    """Tests for respond method."""

    @pytest.mark.asyncio
    async def test_approval_opens_group_visible_to_all_members(self, unit_env):
        """Approving should create a group of three listed for every member."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        relationship_repo = await unit_env.get(RelationshipRepository)
        message_repo = await unit_env.get(MessageRepository)
        settings = await unit_env.get(MatchingSettings)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)
        await service.create_invite(INVITER, APPROVER, INVITEE)

        # Act
        resolution = await service.respond(APPROVER, INVITEE, "approved")

        # Assert
        assert resolution.status == EdgeStatus.APPROVED
        assert resolution.relationship_id is not None

        relationship = await relationship_repo.find_by_id(resolution.relationship_id)
        assert relationship.kind == RelationshipKind.GROUP
        assert relationship.members == frozenset({INVITER, APPROVER, INVITEE})

        for member in (INVITER, APPROVER, INVITEE):
            groups = await service.list_active_groups(member)
            assert [g.relationship_id for g in groups] == [resolution.relationship_id]
            assert groups[0].record_key == group_key(resolution.relationship_id)
            assert set(groups[0].members) == {INVITER, APPROVER, INVITEE}

        messages = await message_repo.find_by_relationship(resolution.relationship_id)
        assert [m.content for m in messages] == [settings.group_seed_message]
        assert messages[0].sender == INVITER

    @pytest.mark.asyncio
    async def test_decline_creates_no_group(self, unit_env):
        """Declining should mark the invite declined and open nothing."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        relationship_repo = await unit_env.get(RelationshipRepository)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)
        await service.create_invite(INVITER, APPROVER, INVITEE)

        # Act
        resolution = await service.respond(APPROVER, INVITEE, "declined")

        # Assert
        assert resolution.status == EdgeStatus.DECLINED
        assert resolution.relationship_id is None
        assert relationship_repo.count() == 0
        assert await service.list_active_groups(INVITEE) == []
        sent = await service.list_sent_invites(INVITER)
        assert [i.status for i in sent] == [InviteStatus.DECLINED]

    @pytest.mark.asyncio
    async def test_second_response_is_already_resolved(self, unit_env):
        """Responding to a decided invite should raise AlreadyResolvedError."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)
        await service.create_invite(INVITER, APPROVER, INVITEE)
        await service.respond(APPROVER, INVITEE, "approved")

        # Act & Assert
        with pytest.raises(AlreadyResolvedError):
            await service.respond(APPROVER, INVITEE, "approved")
        with pytest.raises(AlreadyResolvedError):
            await service.respond(APPROVER, INVITEE, "declined")

    @pytest.mark.asyncio
    async def test_only_named_approver_can_respond(self, unit_env):
        """Someone other than the approver should find no invite to decide."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)
        await service.create_invite(INVITER, APPROVER, INVITEE)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.respond(UserId("dora"), INVITEE, "approved")
        with pytest.raises(NotFoundError):
            await service.respond(
                UserId("dora"), INVITEE, "approved", inviter=INVITER
            )

    @pytest.mark.asyncio
    async def test_invalid_status_is_validation_error(self, unit_env):
        """A status other than approved or declined should be rejected."""
        # Arrange
        service = await unit_env.get(GroupInviteService)

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.respond(APPROVER, INVITEE, "maybe")

    @pytest.mark.asyncio
    async def test_inviter_picks_between_proposals(self, unit_env):
        """Naming the inviter should decide that inviter's proposal only."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)
        other_inviter = UserId("dora")
        await service.create_invite(INVITER, APPROVER, INVITEE)
        await service.create_invite(other_inviter, APPROVER, INVITEE)

        # Act
        await service.respond(APPROVER, INVITEE, "declined", inviter=other_inviter)

        # Assert
        pending = await service.list_pending_approvals(APPROVER)
        assert [i.inviter for i in pending] == [INVITER]

    @pytest.mark.asyncio
    async def test_repairs_missing_group_records(self, unit_env):
        """Approving again should restore group records lost after approval."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        invite_repo = await unit_env.get(GroupInviteRepository)
        await add_profiles(await unit_env.get(ProfileRepository), INVITEE)
        invite = await service.create_invite(INVITER, APPROVER, INVITEE)
        # Approval recorded, but nothing after it was written
        approved = await invite_repo.transition(
            invite.advance(
                status=InviteStatus.APPROVED,
                relationship_id=RelationshipId(uuid4()),
            ),
            expected=InviteStatus.PENDING,
        )

        # Act
        resolution = await service.respond(APPROVER, INVITEE, "approved")

        # Assert
        assert resolution.relationship_id == approved.relationship_id
        groups = await service.list_active_groups(INVITEE)
        assert [g.relationship_id for g in groups] == [approved.relationship_id]


class TestListings:
    """Tests for invite listings."""

    @pytest.mark.asyncio
    async def test_pending_approvals_only_lists_pending(self, unit_env):
        """Approvers should only see invites still waiting for them."""
        # Arrange
        service = await unit_env.get(GroupInviteService)
        await add_profiles(await unit_env.get(ProfileRepository), "cleo", "dora")
        await service.create_invite(INVITER, APPROVER, UserId("cleo"))
        await service.create_invite(INVITER, APPROVER, UserId("dora"))
        await service.respond(APPROVER, UserId("cleo"), "approved")

        # Act
        pending = await service.list_pending_approvals(APPROVER)
        sent = await service.list_sent_invites(INVITER)

        # Assert
        assert [i.invitee for i in pending] == ["dora"]
        assert {i.invitee: i.status for i in sent} == {
            "cleo": InviteStatus.APPROVED,
            "dora": InviteStatus.PENDING,
        }
