"""PostgreSQL implementation of the profile directory."""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kindred.domain.repository import ProfileRepository
from kindred.domain.value import ProfileSummary, UserId
from kindred.persistence.database import store_call
from kindred.persistence.mappers import row_to_profile
from kindred.persistence.tables import profiles_table


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def find(self, handle: UserId) -> ProfileSummary | None:
        """Find a profile summary by handle."""
        stmt = select(profiles_table).where(profiles_table.c.handle == handle)
        async with store_call(self.session_factory, "profile.find") as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_many(self, handles: list[UserId]) -> list[ProfileSummary]:
        """Find summaries for several handles in one query."""
        if not handles:
            return []
        stmt = select(profiles_table).where(profiles_table.c.handle.in_(handles))
        async with store_call(self.session_factory, "profile.find_many") as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_profile(dict(row)) for row in rows]

    async def save(self, profile: ProfileSummary) -> ProfileSummary:
        """Create or replace a profile summary."""
        values = profile.model_dump()
        stmt = (
            insert(profiles_table)
            .values(**values)
            .on_conflict_do_update(
                index_elements=[profiles_table.c.handle],
                set_={"name": values["name"], "photo_url": values["photo_url"]},
            )
        )
        async with store_call(self.session_factory, "profile.save") as session:
            await session.execute(stmt)
        return profile
