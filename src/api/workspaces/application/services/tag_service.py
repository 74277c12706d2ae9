"""Tag application service for the workspaces bounded context.

Creates workspace-scoped tags and attaches them to tasks. A tag may only
be attached to a task in the tag's own workspace.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from workspaces.application.observability import (
    DefaultTagServiceProbe,
    TagServiceProbe,
)
from workspaces.application.services.access_service import WorkspaceAccessService
from workspaces.domain.aggregates import Tag
from workspaces.domain.authorization import WorkspaceAction
from workspaces.domain.value_objects import TagId, TaskId, UserId, WorkspaceId
from workspaces.ports.exceptions import DuplicateTaskTagError
from workspaces.ports.repositories import ITagRepository


class TagService:
    """Application service for tag creation and assignment."""

    def __init__(
        self,
        session: AsyncSession,
        tag_repository: ITagRepository,
        access: WorkspaceAccessService,
        probe: TagServiceProbe | None = None,
    ):
        self._session = session
        self._tag_repository = tag_repository
        self._access = access
        self._probe = probe or DefaultTagServiceProbe()

    async def create_tag(
        self,
        requester_id: UserId,
        workspace_id: WorkspaceId,
        name: str,
        color: str,
    ) -> Tag | None:
        """Create a tag in a workspace.

        Admins and members may create tags; viewers may not.

        Returns:
            The created tag, or None if the requester lacks permission

        Raises:
            ValueError: If name or color is invalid
        """
        async with self._session.begin():
            if not await self._access.can_act_on_workspace(
                requester_id, workspace_id, WorkspaceAction.CREATE_TAG
            ):
                return None

            tag = Tag.create(
                workspace_id=workspace_id,
                name=name,
                color=color,
                created_by=requester_id,
            )
            await self._tag_repository.save(tag)

        self._probe.tag_created(
            tag_id=tag.id.value,
            workspace_id=workspace_id.value,
            acting_user_id=requester_id.value,
        )
        return tag

    async def assign_tag(
        self,
        requester_id: UserId,
        task_id: TaskId,
        tag_id: TagId,
    ) -> bool:
        """Attach a tag to a task.

        The task's workspace is resolved first and the requester's role is
        checked there. The tag must exist and belong to that same workspace.

        Returns:
            True if attached; False if the task is unknown, the requester
            lacks permission, the tag is unknown or from another workspace,
            or the tag is already attached
        """
        try:
            async with self._session.begin():
                workspace_id = await self._access.workspace_for_task_if_allowed(
                    requester_id, task_id, WorkspaceAction.ASSIGN_TAG
                )
                if workspace_id is None:
                    return False

                tag = await self._tag_repository.get_by_id(tag_id)
                if tag is None:
                    self._reject(task_id, tag_id, requester_id, "tag_not_found")
                    return False
                if not tag.belongs_to(workspace_id):
                    self._reject(task_id, tag_id, requester_id, "cross_workspace")
                    return False

                await self._tag_repository.assign(task_id, tag_id)
        except DuplicateTaskTagError:
            self._reject(task_id, tag_id, requester_id, "already_assigned")
            return False

        self._probe.tag_assigned(
            task_id=task_id.value,
            tag_id=tag_id.value,
            acting_user_id=requester_id.value,
        )
        return True

    async def list_tags(
        self,
        requester_id: UserId,
        workspace_id: WorkspaceId,
    ) -> list[Tag] | None:
        """List a workspace's tags; None if the requester is not a member."""
        async with self._session.begin():
            if not await self._access.can_act_on_workspace(
                requester_id, workspace_id, WorkspaceAction.VIEW_TAGS
            ):
                return None
            return await self._tag_repository.list_by_workspace(workspace_id)

    async def list_task_tags(
        self,
        requester_id: UserId,
        task_id: TaskId,
    ) -> list[Tag] | None:
        """List the tags on a task; None if the task is unknown or not visible."""
        async with self._session.begin():
            workspace_id = await self._access.workspace_for_task_if_allowed(
                requester_id, task_id, WorkspaceAction.VIEW_TAGS
            )
            if workspace_id is None:
                return None
            return await self._tag_repository.list_for_task(task_id)

    def _reject(
        self,
        task_id: TaskId,
        tag_id: TagId,
        requester_id: UserId,
        reason: str,
    ) -> None:
        self._probe.tag_assignment_rejected(
            task_id=task_id.value,
            tag_id=tag_id.value,
            acting_user_id=requester_id.value,
            reason=reason,
        )
