"""Unit tests for WorkspaceAccessService."""

from unittest.mock import create_autospec

import pytest

from workspaces.application.observability import WorkspaceAccessProbe
from workspaces.application.services import WorkspaceAccessService
from workspaces.domain.authorization import WorkspaceAction
from workspaces.domain.value_objects import (
    TagId,
    TaskId,
    UserId,
    WorkspaceId,
    WorkspaceRole,
)
from workspaces.ports.repositories import IHierarchyResolver, IMembershipRepository


@pytest.fixture
def mock_memberships():
    return create_autospec(IMembershipRepository, instance=True)


@pytest.fixture
def mock_resolver():
    return create_autospec(IHierarchyResolver, instance=True)


@pytest.fixture
def mock_probe():
    return create_autospec(WorkspaceAccessProbe, instance=True)


@pytest.fixture
def access(mock_memberships, mock_resolver, mock_probe) -> WorkspaceAccessService:
    return WorkspaceAccessService(
        membership_repository=mock_memberships,
        hierarchy_resolver=mock_resolver,
        probe=mock_probe,
    )


class TestAuthorize:
    @pytest.mark.asyncio
    async def test_returns_role_when_allowed(
        self, access, mock_memberships, mock_probe, user_id, workspace_id
    ):
        mock_memberships.get_role.return_value = WorkspaceRole.MEMBER

        role = await access.authorize(user_id, workspace_id, WorkspaceAction.CREATE_TAG)

        assert role == WorkspaceRole.MEMBER
        mock_memberships.get_role.assert_awaited_once_with(user_id, workspace_id)
        mock_probe.access_granted.assert_called_once_with(
            actor_id=user_id.value,
            workspace_id=workspace_id.value,
            action="create_tag",
            role="member",
        )

    @pytest.mark.asyncio
    async def test_non_member_is_denied(
        self, access, mock_memberships, mock_probe, user_id, workspace_id
    ):
        mock_memberships.get_role.return_value = None

        role = await access.authorize(
            user_id, workspace_id, WorkspaceAction.VIEW_WORKSPACE
        )

        assert role is None
        mock_probe.access_denied.assert_called_once_with(
            actor_id=user_id.value,
            workspace_id=workspace_id.value,
            action="view_workspace",
            reason="not_a_member",
        )

    @pytest.mark.asyncio
    async def test_insufficient_role_is_denied(
        self, access, mock_memberships, mock_probe, user_id, workspace_id
    ):
        mock_memberships.get_role.return_value = WorkspaceRole.VIEWER

        allowed = await access.can_act_on_workspace(
            user_id, workspace_id, WorkspaceAction.CREATE_TAG
        )

        assert allowed is False
        assert mock_probe.access_denied.call_args.kwargs["reason"] == "role_viewer"

    @pytest.mark.asyncio
    async def test_rereads_role_on_every_call(
        self, access, mock_memberships, user_id, workspace_id
    ):
        """A role change is visible on the very next check."""
        mock_memberships.get_role.side_effect = [WorkspaceRole.ADMIN, None]

        assert await access.can_act_on_workspace(
            user_id, workspace_id, WorkspaceAction.DELETE_WORKSPACE
        )
        assert not await access.can_act_on_workspace(
            user_id, workspace_id, WorkspaceAction.DELETE_WORKSPACE
        )
        assert mock_memberships.get_role.await_count == 2


class TestTaskAccess:
    @pytest.mark.asyncio
    async def test_resolves_task_workspace(
        self, access, mock_memberships, mock_resolver, user_id, workspace_id
    ):
        task_id = TaskId.generate()
        mock_resolver.workspace_for_task.return_value = workspace_id
        mock_memberships.get_role.return_value = WorkspaceRole.MEMBER

        result = await access.workspace_for_task_if_allowed(
            user_id, task_id, WorkspaceAction.ASSIGN_TAG
        )

        assert result == workspace_id
        mock_resolver.workspace_for_task.assert_awaited_once_with(task_id)

    @pytest.mark.asyncio
    async def test_unknown_task_is_denied_without_role_lookup(
        self, access, mock_memberships, mock_resolver, mock_probe, user_id
    ):
        mock_resolver.workspace_for_task.return_value = None

        allowed = await access.can_act_on_task(
            user_id, TaskId.generate(), WorkspaceAction.VIEW_WORKSPACE
        )

        assert allowed is False
        mock_memberships.get_role.assert_not_awaited()
        assert mock_probe.access_denied.call_args.kwargs["reason"] == "task_not_found"

    @pytest.mark.asyncio
    async def test_viewer_cannot_assign_on_task(
        self, access, mock_memberships, mock_resolver, user_id, workspace_id
    ):
        mock_resolver.workspace_for_task.return_value = workspace_id
        mock_memberships.get_role.return_value = WorkspaceRole.VIEWER

        assert not await access.can_act_on_task(
            user_id, TaskId.generate(), WorkspaceAction.ASSIGN_TAG
        )


class TestTagAccess:
    @pytest.mark.asyncio
    async def test_resolves_tag_workspace(
        self, access, mock_memberships, mock_resolver, user_id, workspace_id
    ):
        mock_resolver.workspace_for_tag.return_value = workspace_id
        mock_memberships.get_role.return_value = WorkspaceRole.VIEWER

        assert await access.can_act_on_tag(
            user_id, TagId.generate(), WorkspaceAction.VIEW_TAGS
        )

    @pytest.mark.asyncio
    async def test_unknown_tag_is_denied(
        self, access, mock_resolver, mock_probe, user_id
    ):
        mock_resolver.workspace_for_tag.return_value = None

        assert not await access.can_act_on_tag(
            user_id, TagId.generate(), WorkspaceAction.VIEW_TAGS
        )
        assert mock_probe.access_denied.call_args.kwargs["reason"] == "tag_not_found"


class TestRoleIn:
    @pytest.mark.asyncio
    async def test_returns_current_role(
        self, access, mock_memberships, user_id, workspace_id
    ):
        mock_memberships.get_role.return_value = WorkspaceRole.ADMIN
        assert await access.role_in(user_id, workspace_id) == WorkspaceRole.ADMIN

    @pytest.mark.asyncio
    async def test_does_not_emit_decisions(
        self, access, mock_memberships, mock_probe, user_id
    ):
        mock_memberships.get_role.return_value = None

        assert await access.role_in(user_id, WorkspaceId.generate()) is None
        mock_probe.access_denied.assert_not_called()
