"""Group invite domain service."""

from functools import partial
from uuid import uuid4

import logfire

from kindred.config import MatchingSettings
from kindred.domain.error import (
    AlreadyResolvedError,
    ConflictError,
    InvalidInviteeError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from kindred.domain.model import (
    Attempt,
    Conflict,
    Failed,
    GroupInvite,
    Resolution,
    Resolved,
)
from kindred.domain.model.invite import group_key, proposal_key
from kindred.domain.repository import GroupInviteRepository
from kindred.domain.value import (
    EdgeStatus,
    InviteId,
    InviteRecordType,
    InviteStatus,
    RelationshipId,
    RelationshipKind,
    UserId,
)

from .base import Service
from .materializer import RelationshipMaterializer
from .profile_service import ProfileService

_DECISIONS = {
    InviteStatus.APPROVED.value: InviteStatus.APPROVED,
    InviteStatus.DECLINED.value: InviteStatus.DECLINED,
}


class GroupInviteService(Service):
    """Domain service for the three-party group invite workflow.

    The inviter proposes adding the invitee; the approver decides. An
    approval opens a group of all three and writes one active group
    record per member so each of them can list the group.
    """

    def __init__(
        self,
        invite_repository: GroupInviteRepository,
        profile_service: ProfileService,
        materializer: RelationshipMaterializer,
        matching_settings: MatchingSettings,
    ) -> None:
        """Initialize group invite service.

        Args:
            invite_repository: Group invite repository
            profile_service: Profile directory service
            materializer: Relationship materializer
            matching_settings: Seed texts and retry budget
        """
        self.invite_repository = invite_repository
        self.profile_service = profile_service
        self.materializer = materializer
        self.matching_settings = matching_settings

    @property
    def attempts(self) -> int:
        return 1 + self.matching_settings.conflict_retries

    async def create_invite(
        self, inviter: UserId, approver: UserId, invitee: UserId
    ) -> GroupInvite:
        """Propose adding an invitee.

        A second proposal for the same inviter and invitee while one is
        pending returns the pending one. A declined proposal can be made
        again.

        Args:
            inviter: User proposing the invite
            approver: User who decides
            invitee: User being invited

        Returns:
            The pending proposal

        Raises:
            ValidationError: If a handle is blank or two roles share a user
            InvalidInviteeError: If the invitee has no profile
            AlreadyResolvedError: If the same proposal was already approved
        """
        self._require_distinct(inviter=inviter, approver=approver, invitee=invitee)

        with logfire.span(
            "group_invite_service.create_invite",
            inviter=inviter,
            approver=approver,
            invitee=invitee,
        ):
            if not await self.profile_service.exists(invitee):
                logfire.warn("Invite for unknown invitee", invitee=invitee)
                raise InvalidInviteeError(invitee)

            key = proposal_key(invitee)
            for _ in range(self.attempts):
                existing = await self.invite_repository.find(inviter, key)
                if existing is not None and existing.status == InviteStatus.PENDING:
                    logfire.info("Invite already pending", invite_id=str(existing.id))
                    return existing
                if existing is not None and existing.status == InviteStatus.APPROVED:
                    raise AlreadyResolvedError(
                        "GroupInvite", existing.key, existing.status.value
                    )

                proposal = GroupInvite(
                    id=InviteId(uuid4()),
                    subject=inviter,
                    record_key=key,
                    record_type=InviteRecordType.PROPOSAL,
                    inviter=inviter,
                    approver=approver,
                    invitee=invitee,
                    status=InviteStatus.PENDING,
                )
                try:
                    saved = await self.invite_repository.transition(
                        proposal, expected=existing.status if existing else None
                    )
                except ConflictError as e:
                    logfire.warn("Invite write lost", reason=str(e))
                    continue

                logfire.info(
                    "Invite created",
                    invite_id=str(saved.id),
                    inviter=inviter,
                    approver=approver,
                    invitee=invitee,
                )
                return saved

            # Every write lost: whoever won left a record behind
            current = await self.invite_repository.find(inviter, key)
            if current is None:
                raise StoreUnavailableError("group_invite.create", "record vanished")
            return current

    async def respond(
        self,
        approver: UserId,
        invitee: UserId,
        status: str,
        inviter: UserId | None = None,
    ) -> Resolution:
        """Approve or decline a pending proposal.

        The proposal is looked up by approver and invitee; when several
        inviters proposed the same invitee, the oldest pending proposal
        wins unless ``inviter`` names one.

        Args:
            approver: User deciding
            invitee: User who was proposed
            status: "approved" or "declined"
            inviter: Optional inviter to disambiguate

        Returns:
            Resolution with status approved (and the group id) or declined

        Raises:
            ValidationError: If handles are invalid or status is not a decision
            NotFoundError: If the approver has no such proposal
            AlreadyResolvedError: If the proposal was already decided
        """
        self._require_distinct(approver=approver, invitee=invitee)
        decision = _DECISIONS.get(status)
        if decision is None:
            raise ValidationError(
                f"Invalid status {status!r}: expected approved or declined"
            )

        with logfire.span(
            "group_invite_service.respond",
            approver=approver,
            invitee=invitee,
            decision=decision.value,
        ):
            proposal = await self._find_proposal(approver, invitee, inviter)
            resolution = await self._run_attempts(
                partial(self._attempt_respond, proposal, approver, decision),
                self.attempts,
                "group_invite.respond",
                approver=approver,
                invitee=invitee,
            )
            if resolution is None:
                current = await self.invite_repository.find(
                    proposal.subject, proposal.record_key
                )
                current = current or proposal
                resolution = Resolution(
                    status=EdgeStatus(current.status.value),
                    relationship_id=current.relationship_id,
                )

            logfire.info(
                "Invite resolved",
                invite_id=str(proposal.id),
                status=resolution.status.value,
                relationship_id=str(resolution.relationship_id),
            )
            return resolution

    async def list_pending_approvals(self, approver: UserId) -> list[GroupInvite]:
        """List proposals waiting for an approver, oldest first."""
        with logfire.span(
            "group_invite_service.list_pending_approvals", approver=approver
        ):
            invites = await self.invite_repository.find_by_approver(
                approver, InviteStatus.PENDING
            )
            logfire.info("Pending approvals listed", approver=approver, count=len(invites))
            return invites

    async def list_sent_invites(self, inviter: UserId) -> list[GroupInvite]:
        """List every proposal an inviter made, newest first."""
        with logfire.span("group_invite_service.list_sent_invites", inviter=inviter):
            invites = await self.invite_repository.find_by_subject(
                inviter, InviteRecordType.PROPOSAL
            )
            logfire.info("Sent invites listed", inviter=inviter, count=len(invites))
            return invites

    async def list_active_groups(self, user: UserId) -> list[GroupInvite]:
        """List the active group records of a member, newest first."""
        with logfire.span("group_invite_service.list_active_groups", user=user):
            groups = await self.invite_repository.find_by_subject(
                user, InviteRecordType.GROUP, InviteStatus.ACTIVE
            )
            logfire.info("Active groups listed", user=user, count=len(groups))
            return groups

    async def _find_proposal(
        self, approver: UserId, invitee: UserId, inviter: UserId | None
    ) -> GroupInvite:
        if inviter is not None:
            record = await self.invite_repository.find(inviter, proposal_key(invitee))
            if record is None or record.approver != approver:
                raise NotFoundError("GroupInvite", f"{inviter}:{invitee}")
            return record

        candidates = [
            record
            for record in await self.invite_repository.find_by_approver(approver)
            if record.invitee == invitee
        ]
        if not candidates:
            raise NotFoundError("GroupInvite", f"{approver}:{invitee}")

        pending = [r for r in candidates if r.status == InviteStatus.PENDING]
        return pending[0] if pending else candidates[-1]

    async def _attempt_respond(
        self, proposal: GroupInvite, approver: UserId, decision: InviteStatus
    ) -> Attempt:
        # Index reads may lag, so decide on the primary-key record
        record = await self.invite_repository.find(
            proposal.subject, proposal.record_key
        )
        if record is None or record.approver != approver:
            return Failed(error=NotFoundError("GroupInvite", proposal.key))

        if (
            record.status == InviteStatus.APPROVED
            and decision == InviteStatus.APPROVED
            and record.relationship_id is not None
            and not await self._group_complete(record, record.relationship_id)
        ):
            logfire.warn("Repairing half-approved invite", invite_id=str(record.id))
            return await self._open_group(record, record.relationship_id)

        if record.status != InviteStatus.PENDING:
            return Failed(
                error=AlreadyResolvedError("GroupInvite", record.key, record.status.value)
            )

        if decision == InviteStatus.DECLINED:
            try:
                await self.invite_repository.transition(
                    record.advance(status=InviteStatus.DECLINED),
                    expected=InviteStatus.PENDING,
                )
            except ConflictError as e:
                return Conflict(reason=str(e))
            return Resolved(resolution=Resolution(status=EdgeStatus.DECLINED))

        relationship_id = RelationshipId(uuid4())
        try:
            record = await self.invite_repository.transition(
                record.advance(
                    status=InviteStatus.APPROVED,
                    relationship_id=relationship_id,
                    members=[record.inviter, record.approver, record.invitee],
                ),
                expected=InviteStatus.PENDING,
            )
        except ConflictError as e:
            return Conflict(reason=str(e))

        return await self._open_group(record, relationship_id)

    async def _open_group(
        self, proposal: GroupInvite, relationship_id: RelationshipId
    ) -> Attempt:
        members = [proposal.inviter, proposal.approver, proposal.invitee]
        _, created = await self.materializer.materialize(
            members=set(members),
            kind=RelationshipKind.GROUP,
            seed_content=self.matching_settings.group_seed_message,
            seed_author=proposal.inviter,
            relationship_id=relationship_id,
        )

        for member in members:
            group = GroupInvite(
                id=proposal.id,
                subject=member,
                record_key=group_key(relationship_id),
                record_type=InviteRecordType.GROUP,
                inviter=proposal.inviter,
                approver=proposal.approver,
                invitee=proposal.invitee,
                status=InviteStatus.ACTIVE,
                relationship_id=relationship_id,
                members=members,
            )
            try:
                await self.invite_repository.transition(group, expected=None)
            except ConflictError:
                logfire.info("Group record already present", member=member)

        return Resolved(
            resolution=Resolution(
                status=EdgeStatus.APPROVED,
                relationship_id=relationship_id,
                created=created,
            )
        )

    async def _group_complete(
        self, proposal: GroupInvite, relationship_id: RelationshipId
    ) -> bool:
        """Whether every member already has its group record."""
        for member in (proposal.inviter, proposal.approver, proposal.invitee):
            if await self.invite_repository.find(member, group_key(relationship_id)) is None:
                return False
        return True
