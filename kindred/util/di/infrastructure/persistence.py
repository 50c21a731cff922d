"""Persistence infrastructure providers."""

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from kindred.config import Settings
from kindred.domain.repository import (
    EdgeRepository,
    GroupInviteRepository,
    MessageRepository,
    ProfileRepository,
    RelationshipRepository,
)
from kindred.persistence.database import create_engine, create_session_factory
from kindred.persistence.repository import (
    PostgresEdgeRepository,
    PostgresGroupInviteRepository,
    PostgresMessageRepository,
    PostgresProfileRepository,
    PostgresRelationshipRepository,
)
from kindred.util.di.base import ProviderBase
from kindred.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL.

    The engine and session factory live for the whole application;
    repositories are built per request and open a short transaction per
    store call.
    """

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    def get_edge_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> EdgeRepository:
        """Provide interaction edge repository."""
        return PostgresEdgeRepository(session_factory)

    @provide(scope=Scope.REQUEST)
    def get_relationship_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> RelationshipRepository:
        """Provide relationship repository."""
        return PostgresRelationshipRepository(session_factory)

    @provide(scope=Scope.REQUEST)
    def get_message_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> MessageRepository:
        """Provide message repository."""
        return PostgresMessageRepository(session_factory)

    @provide(scope=Scope.REQUEST)
    def get_group_invite_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> GroupInviteRepository:
        """Provide group invite repository."""
        return PostgresGroupInviteRepository(session_factory)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> ProfileRepository:
        """Provide profile repository."""
        return PostgresProfileRepository(session_factory)
