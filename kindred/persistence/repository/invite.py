"""PostgreSQL implementation of GroupInvite repository."""

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kindred.domain.error import ConflictError
from kindred.domain.model import GroupInvite
from kindred.domain.repository import GroupInviteRepository
from kindred.domain.value import InviteRecordType, InviteStatus, UserId
from kindred.persistence.database import store_call
from kindred.persistence.mappers import group_invite_to_dict, row_to_group_invite
from kindred.persistence.tables import group_invites_table as invites


class PostgresGroupInviteRepository(GroupInviteRepository):
    """PostgreSQL implementation of GroupInviteRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def find(self, subject: UserId, record_key: str) -> GroupInvite | None:
        """Find a record by its primary key."""
        stmt = select(invites).where(
            and_(invites.c.subject == subject, invites.c.record_key == record_key)
        )
        async with store_call(self.session_factory, "group_invite.find") as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_group_invite(dict(row)) if row else None

    async def transition(
        self, record: GroupInvite, expected: InviteStatus | None
    ) -> GroupInvite:
        """Conditionally write a record.

        Raises:
            ConflictError: If another writer got there first
        """
        values = group_invite_to_dict(record)
        async with store_call(
            self.session_factory, "group_invite.transition"
        ) as session:
            if expected is None:
                try:
                    await session.execute(insert(invites).values(**values))
                except IntegrityError as e:
                    raise ConflictError("GroupInvite", record.key) from e
                return record

            stmt = (
                update(invites)
                .where(
                    and_(
                        invites.c.subject == record.subject,
                        invites.c.record_key == record.record_key,
                        invites.c.status == expected.value,
                    )
                )
                .values(**values)
                .returning(invites)
            )
            result = await session.execute(stmt)
            row = result.mappings().first()
            if row is None:
                raise ConflictError("GroupInvite", record.key)
        return row_to_group_invite(dict(row))

    async def find_by_subject(
        self,
        subject: UserId,
        record_type: InviteRecordType,
        status: InviteStatus | None = None,
    ) -> list[GroupInvite]:
        """List records owned by a user, newest first."""
        stmt = (
            select(invites)
            .where(
                and_(
                    invites.c.subject == subject,
                    invites.c.record_type == record_type.value,
                )
            )
            .order_by(invites.c.created_at.desc())
        )
        if status:
            stmt = stmt.where(invites.c.status == status.value)

        async with store_call(
            self.session_factory, "group_invite.find_by_subject"
        ) as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_group_invite(dict(row)) for row in rows]

    async def find_by_approver(
        self, approver: UserId, status: InviteStatus | None = None
    ) -> list[GroupInvite]:
        """List proposals for an approver, oldest first."""
        stmt = (
            select(invites)
            .where(
                and_(
                    invites.c.approver == approver,
                    invites.c.record_type == InviteRecordType.PROPOSAL.value,
                )
            )
            .order_by(invites.c.created_at.asc())
        )
        if status:
            stmt = stmt.where(invites.c.status == status.value)

        async with store_call(
            self.session_factory, "group_invite.find_by_approver"
        ) as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_group_invite(dict(row)) for row in rows]
