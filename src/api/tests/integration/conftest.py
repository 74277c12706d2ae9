"""Integration test fixtures for store-backed tests.

The real repositories run against a throwaway SQLite database (through
aiosqlite) with foreign keys enforced, so cascades and uniqueness
constraints behave as they do in PostgreSQL. A file database is used
rather than :memory: because the notification sink opens its own
connection.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from ulid import ULID

from infrastructure.database import Base
from infrastructure.database.engines import create_engine
from infrastructure.settings import DatabaseSettings
from workspaces.application.services import (
    TagService,
    WorkspaceAccessService,
    WorkspaceService,
)
from workspaces.domain.value_objects import (
    ProjectId,
    TaskId,
    User,
    UserId,
    WorkspaceId,
)
from workspaces.infrastructure.hierarchy_resolver import HierarchyResolver
from workspaces.infrastructure.membership_repository import MembershipRepository
from workspaces.infrastructure.models import ProjectModel, TaskModel, UserModel
from workspaces.infrastructure.notification_sink import SqlNotificationSink
from workspaces.infrastructure.tag_repository import TagRepository
from workspaces.infrastructure.user_directory import SqlUserDirectory
from workspaces.infrastructure.workspace_repository import WorkspaceRepository


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture
def sqlite_settings(tmp_path) -> DatabaseSettings:
    """Database settings pointing at a per-test SQLite file."""
    return DatabaseSettings(
        drivername="sqlite+aiosqlite",
        database=str(tmp_path / "taskboard.db"),
    )


@pytest_asyncio.fixture
async def engine(sqlite_settings: DatabaseSettings) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine with the schema created."""
    engine = create_engine(sqlite_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide the session shared by the services under test."""
    async with session_factory() as session:
        yield session


@dataclass
class Board:
    """The services and repositories of one unit of work, wired together."""

    session: AsyncSession
    memberships: MembershipRepository
    workspaces: WorkspaceRepository
    tags: TagRepository
    resolver: HierarchyResolver
    directory: SqlUserDirectory
    access: WorkspaceAccessService
    workspace_service: WorkspaceService
    tag_service: TagService


def build_board(
    session: AsyncSession,
    notification_sink,
    protect_last_admin: bool = False,
) -> Board:
    memberships = MembershipRepository(session)
    workspaces = WorkspaceRepository(session)
    tags = TagRepository(session)
    resolver = HierarchyResolver(session)
    directory = SqlUserDirectory(session)
    access = WorkspaceAccessService(
        membership_repository=memberships,
        hierarchy_resolver=resolver,
    )
    return Board(
        session=session,
        memberships=memberships,
        workspaces=workspaces,
        tags=tags,
        resolver=resolver,
        directory=directory,
        access=access,
        workspace_service=WorkspaceService(
            session=session,
            workspace_repository=workspaces,
            membership_repository=memberships,
            access=access,
            user_directory=directory,
            notification_sink=notification_sink,
            protect_last_admin=protect_last_admin,
        ),
        tag_service=TagService(session=session, tag_repository=tags, access=access),
    )


@pytest.fixture
def notification_sink(
    session_factory: async_sessionmaker[AsyncSession],
) -> SqlNotificationSink:
    return SqlNotificationSink(session_factory)


@pytest.fixture
def board(async_session: AsyncSession, notification_sink) -> Board:
    return build_board(async_session, notification_sink)


@pytest.fixture
def board_factory(async_session: AsyncSession, notification_sink):
    """Build a Board with a custom sink or last-admin policy."""

    def factory(sink=None, protect_last_admin: bool = False) -> Board:
        return build_board(
            async_session,
            sink if sink is not None else notification_sink,
            protect_last_admin=protect_last_admin,
        )

    return factory


@pytest.fixture
def seed(session_factory: async_sessionmaker[AsyncSession]):
    """Helpers inserting rows owned by other subsystems (users, projects, tasks)."""

    class Seeder:
        async def user(self, full_name: str, email: str) -> User:
            user = User(id=UserId(value=str(ULID())), full_name=full_name, email=email)
            async with session_factory() as session, session.begin():
                session.add(
                    UserModel(id=user.id.value, full_name=full_name, email=email)
                )
            return user

        async def project(self, workspace_id: WorkspaceId, name: str) -> ProjectId:
            project_id = ProjectId.generate()
            async with session_factory() as session, session.begin():
                session.add(
                    ProjectModel(
                        id=project_id.value,
                        workspace_id=workspace_id.value,
                        name=name,
                    )
                )
            return project_id

        async def task(self, project_id: ProjectId, title: str) -> TaskId:
            task_id = TaskId.generate()
            async with session_factory() as session, session.begin():
                session.add(
                    TaskModel(id=task_id.value, project_id=project_id.value, title=title)
                )
            return task_id

    return Seeder()
