"""PostgreSQL implementation of Message repository."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kindred.domain.model import Message
from kindred.domain.repository import MessageRepository
from kindred.domain.value import RelationshipId
from kindred.persistence.database import store_call
from kindred.persistence.mappers import message_to_dict, row_to_message
from kindred.persistence.tables import messages_table


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def save(self, message: Message) -> Message:
        """Save a message, replacing content and read flag on id collision."""
        values = message_to_dict(message)
        stmt = (
            insert(messages_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[messages_table.c.id],
                set_={
                    "content": values["content"],
                    "is_unread": values["is_unread"],
                },
            )
        )
        async with store_call(self.session_factory, "message.save") as session:
            await session.execute(stmt)
        return message

    async def find_by_relationship(
        self, relationship_id: RelationshipId, limit: int = 50
    ) -> list[Message]:
        """List messages of a relationship, newest first."""
        stmt = (
            select(messages_table)
            .where(messages_table.c.relationship_id == relationship_id)
            .order_by(messages_table.c.created_at.desc())
            .limit(limit)
        )
        async with store_call(
            self.session_factory, "message.find_by_relationship"
        ) as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_message(dict(row)) for row in rows]
