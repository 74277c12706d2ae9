"""Integration tests for workspace lifecycle and membership management."""

from unittest.mock import patch

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from workspaces.domain.aggregates import WorkspacePatch
from workspaces.domain.value_objects import UserId, WorkspaceRole
from workspaces.infrastructure.models import (
    NotificationModel,
    ProjectModel,
    TagModel,
    TaskModel,
    TaskTagModel,
    WorkspaceMembershipModel,
    WorkspaceModel,
)
from workspaces.infrastructure.notification_sink import SqlNotificationSink
from workspaces.ports.exceptions import UserNotFoundError, WorkspaceCreationError

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def alice(seed):
    return await seed.user("Alice Admin", "alice@example.com")


@pytest_asyncio.fixture
async def bob(seed):
    return await seed.user("Bob Builder", "bob@example.com")


async def count_rows(session_factory, model, **filters) -> int:
    """Count rows from a fresh session, outside the services' transactions."""
    stmt = select(func.count()).select_from(model).filter_by(**filters)
    async with session_factory() as session:
        return (await session.execute(stmt)).scalar_one()


class TestCreateWorkspace:
    @pytest.mark.asyncio
    async def test_creator_becomes_admin(self, board, alice):
        workspace = await board.workspace_service.create_workspace(
            alice.id, "Sprint Planning", "Q3 sprint"
        )

        view = await board.workspace_service.get_workspace(alice.id, workspace.id)
        assert view is not None
        assert view.role == WorkspaceRole.ADMIN
        assert view.workspace.description == "Q3 sprint"

    @pytest.mark.asyncio
    async def test_unknown_creator_is_rejected(self, board, session_factory):
        with pytest.raises(UserNotFoundError):
            await board.workspace_service.create_workspace(UserId.generate(), "Ghost")

        assert await count_rows(session_factory, WorkspaceModel) == 0

    @pytest.mark.asyncio
    async def test_unknown_creator_with_blank_name_is_rejected_as_unknown(
        self, board, session_factory
    ):
        with pytest.raises(UserNotFoundError):
            await board.workspace_service.create_workspace(UserId.generate(), "")

        assert await count_rows(session_factory, WorkspaceModel) == 0

    @pytest.mark.asyncio
    async def test_blank_name_from_known_creator_is_rejected(
        self, board, alice, session_factory
    ):
        with pytest.raises(ValueError):
            await board.workspace_service.create_workspace(alice.id, "   ")

        assert await count_rows(session_factory, WorkspaceModel) == 0

    @pytest.mark.asyncio
    async def test_membership_failure_rolls_back_workspace(
        self, board, alice, session_factory
    ):
        """A failed admin insert leaves neither the workspace nor the membership."""
        failure = IntegrityError("INSERT INTO workspace_memberships", {}, Exception("boom"))

        with patch.object(board.memberships, "add_member", side_effect=failure):
            with pytest.raises(WorkspaceCreationError) as exc_info:
                await board.workspace_service.create_workspace(alice.id, "Doomed")

        assert exc_info.value.__cause__ is failure
        assert await count_rows(session_factory, WorkspaceModel) == 0
        assert await count_rows(session_factory, WorkspaceMembershipModel) == 0

        # The session is usable again after the rollback
        workspace = await board.workspace_service.create_workspace(alice.id, "Retry")
        assert await count_rows(session_factory, WorkspaceModel, id=workspace.id.value) == 1


class TestSprintPlanningScenario:
    @pytest.mark.asyncio
    async def test_member_cannot_delete_but_admin_can(
        self, board, alice, bob, session_factory
    ):
        workspace = await board.workspace_service.create_workspace(
            alice.id, "Sprint Planning"
        )
        assert await count_rows(session_factory, WorkspaceModel, id=workspace.id.value) == 1
        async with board.session.begin():
            assert (
                await board.memberships.get_role(alice.id, workspace.id)
                == WorkspaceRole.ADMIN
            )

        assert await board.workspace_service.add_member(
            alice.id, workspace.id, "bob@example.com", WorkspaceRole.MEMBER
        )
        assert (
            await count_rows(
                session_factory, WorkspaceMembershipModel, workspace_id=workspace.id.value
            )
            == 2
        )

        assert await board.workspace_service.delete_workspace(bob.id, workspace.id) is False
        assert await count_rows(session_factory, WorkspaceModel, id=workspace.id.value) == 1

        assert await board.workspace_service.delete_workspace(alice.id, workspace.id) is True
        async with board.session.begin():
            assert await board.memberships.get_role(alice.id, workspace.id) is None
            assert await board.memberships.get_role(bob.id, workspace.id) is None

    @pytest.mark.asyncio
    async def test_admin_adds_viewer_who_can_read_but_not_manage(
        self, board, alice, bob, session_factory
    ):
        workspace = await board.workspace_service.create_workspace(
            alice.id, "Sprint Planning"
        )

        added = await board.workspace_service.add_member(
            alice.id, workspace.id, "Bob@Example.com", WorkspaceRole.VIEWER
        )
        assert added is True

        # Bob sees the workspace with his viewer role
        views = await board.workspace_service.list_workspaces(bob.id)
        assert [(v.workspace.name, v.role) for v in views] == [
            ("Sprint Planning", WorkspaceRole.VIEWER)
        ]

        members = await board.workspace_service.list_members(bob.id, workspace.id)
        assert {(m.email, m.role) for m in members} == {
            ("alice@example.com", WorkspaceRole.ADMIN),
            ("bob@example.com", WorkspaceRole.VIEWER),
        }

        # A viewer cannot manage the workspace
        assert not await board.workspace_service.update_workspace(
            bob.id, workspace.id, WorkspacePatch(name="Hijacked")
        )
        assert not await board.workspace_service.delete_workspace(bob.id, workspace.id)
        assert not await board.workspace_service.remove_member(
            bob.id, workspace.id, alice.id
        )
        assert not await board.workspace_service.is_workspace_admin(bob.id, workspace.id)

        # Adding Bob again is refused
        assert not await board.workspace_service.add_member(
            alice.id, workspace.id, "bob@example.com", WorkspaceRole.MEMBER
        )

        assert (
            await count_rows(
                session_factory,
                NotificationModel,
                user_id=bob.id.value,
                event_type="user_added_to_workspace",
            )
            == 1
        )

    @pytest.mark.asyncio
    async def test_unknown_email_is_refused(self, board, alice):
        workspace = await board.workspace_service.create_workspace(alice.id, "A")

        assert not await board.workspace_service.add_member(
            alice.id, workspace.id, "nobody@example.com", WorkspaceRole.MEMBER
        )

    @pytest.mark.asyncio
    async def test_non_member_sees_nothing(self, board, alice, bob):
        workspace = await board.workspace_service.create_workspace(alice.id, "Private")

        assert await board.workspace_service.get_workspace(bob.id, workspace.id) is None
        assert await board.workspace_service.list_members(bob.id, workspace.id) is None
        assert await board.workspace_service.list_workspaces(bob.id) == []


class TestUpdateWorkspace:
    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, board, alice):
        workspace = await board.workspace_service.create_workspace(
            alice.id, "Sprint Planning", "original"
        )

        updated = await board.workspace_service.update_workspace(
            alice.id, workspace.id, WorkspacePatch(name="Sprint 42")
        )

        assert updated is not None
        view = await board.workspace_service.get_workspace(alice.id, workspace.id)
        assert view.workspace.name == "Sprint 42"
        assert view.workspace.description == "original"


class TestRemoveMember:
    @pytest.mark.asyncio
    async def test_removal_notifies_and_revokes_access(
        self, board, alice, bob, session_factory
    ):
        workspace = await board.workspace_service.create_workspace(alice.id, "Team")
        await board.workspace_service.add_member(
            alice.id, workspace.id, "bob@example.com", WorkspaceRole.MEMBER
        )

        assert await board.workspace_service.remove_member(alice.id, workspace.id, bob.id)

        assert await board.workspace_service.get_workspace(bob.id, workspace.id) is None
        assert (
            await count_rows(
                session_factory,
                NotificationModel,
                user_id=bob.id.value,
                event_type="user_removed_from_workspace",
            )
            == 1
        )

    @pytest.mark.asyncio
    async def test_removing_non_member_returns_false(self, board, alice, bob):
        workspace = await board.workspace_service.create_workspace(alice.id, "Team")

        assert not await board.workspace_service.remove_member(
            alice.id, workspace.id, bob.id
        )

    @pytest.mark.asyncio
    async def test_last_admin_may_leave_by_default(self, board, alice):
        workspace = await board.workspace_service.create_workspace(alice.id, "Solo")

        assert await board.workspace_service.remove_member(
            alice.id, workspace.id, alice.id
        )

    @pytest.mark.asyncio
    async def test_last_admin_guard_when_enabled(self, board_factory, alice, bob):
        board = board_factory(protect_last_admin=True)
        workspace = await board.workspace_service.create_workspace(alice.id, "Solo")

        assert not await board.workspace_service.remove_member(
            alice.id, workspace.id, alice.id
        )

        # With a second admin the first may leave
        await board.workspace_service.add_member(
            alice.id, workspace.id, "bob@example.com", WorkspaceRole.ADMIN
        )
        assert await board.workspace_service.remove_member(
            alice.id, workspace.id, alice.id
        )


class TestNotificationFailure:
    @pytest.mark.asyncio
    async def test_failed_notification_keeps_membership(
        self, board_factory, alice, bob, tmp_path
    ):
        # An engine whose database file cannot be opened
        broken_engine = create_async_engine(
            f"sqlite+aiosqlite:///{tmp_path}/missing/dir/notifications.db"
        )
        board = board_factory(
            sink=SqlNotificationSink(async_sessionmaker(broken_engine))
        )
        workspace = await board.workspace_service.create_workspace(alice.id, "Team")

        try:
            added = await board.workspace_service.add_member(
                alice.id, workspace.id, "bob@example.com", WorkspaceRole.MEMBER
            )
        finally:
            await broken_engine.dispose()

        assert added is True
        view = await board.workspace_service.get_workspace(bob.id, workspace.id)
        assert view is not None
        assert view.role == WorkspaceRole.MEMBER


class TestDeleteWorkspace:
    @pytest.mark.asyncio
    async def test_delete_cascades_to_everything_below(
        self, board, alice, bob, seed, session_factory
    ):
        workspace = await board.workspace_service.create_workspace(alice.id, "Doomed")
        await board.workspace_service.add_member(
            alice.id, workspace.id, "bob@example.com", WorkspaceRole.MEMBER
        )
        project_id = await seed.project(workspace.id, "Backlog")
        task_id = await seed.task(project_id, "Ship it")
        tag = await board.tag_service.create_tag(alice.id, workspace.id, "urgent", "red")
        assert await board.tag_service.assign_tag(alice.id, task_id, tag.id)

        assert await board.workspace_service.delete_workspace(alice.id, workspace.id)

        for model in (
            WorkspaceModel,
            WorkspaceMembershipModel,
            ProjectModel,
            TaskModel,
            TagModel,
            TaskTagModel,
        ):
            assert await count_rows(session_factory, model) == 0, model.__tablename__

        assert not await board.workspace_service.has_access_to_task_workspace(
            alice.id, task_id
        )

    @pytest.mark.asyncio
    async def test_delete_twice_returns_false(self, board, alice):
        workspace = await board.workspace_service.create_workspace(alice.id, "Once")

        assert await board.workspace_service.delete_workspace(alice.id, workspace.id)
        assert not await board.workspace_service.delete_workspace(alice.id, workspace.id)
