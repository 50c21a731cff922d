"""In-memory group invite repository for testing."""

import asyncio

from kindred.domain.error import ConflictError
from kindred.domain.model.invite import GroupInvite
from kindred.domain.repository.invite import GroupInviteRepository
from kindred.domain.value import InviteRecordType, InviteStatus, UserId


class InMemoryGroupInviteRepository(GroupInviteRepository):
    """In-memory implementation of GroupInviteRepository for testing."""

    def __init__(self) -> None:
        self._records: dict[tuple[UserId, str], GroupInvite] = {}

    async def find(self, subject: UserId, record_key: str) -> GroupInvite | None:
        """Find a record by its primary key."""
        await asyncio.sleep(0)
        return self._records.get((subject, record_key))

    async def transition(
        self, record: GroupInvite, expected: InviteStatus | None
    ) -> GroupInvite:
        """Store the record if the current status matches ``expected``.

        Raises:
            ConflictError: If the stored status differs
        """
        await asyncio.sleep(0)
        key = (record.subject, record.record_key)
        current = self._records.get(key)
        current_status = current.status if current else None
        if current_status != expected:
            raise ConflictError("GroupInvite", record.key)
        self._records[key] = record
        return record

    async def find_by_subject(
        self,
        subject: UserId,
        record_type: InviteRecordType,
        status: InviteStatus | None = None,
    ) -> list[GroupInvite]:
        """List records owned by a user, newest first."""
        await asyncio.sleep(0)
        matches = [
            r
            for r in self._records.values()
            if r.subject == subject
            and r.record_type == record_type
            and (status is None or r.status == status)
        ]
        matches.sort(key=lambda r: r.created_at, reverse=True)
        return matches

    async def find_by_approver(
        self, approver: UserId, status: InviteStatus | None = None
    ) -> list[GroupInvite]:
        """List proposals for an approver, oldest first."""
        await asyncio.sleep(0)
        matches = [
            r
            for r in self._records.values()
            if r.approver == approver
            and r.record_type == InviteRecordType.PROPOSAL
            and (status is None or r.status == status)
        ]
        matches.sort(key=lambda r: r.created_at)
        return matches
