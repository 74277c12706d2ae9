"""Resolution of leaf resources to their owning workspace.

Each lookup is a single query along the only sanctioned path
(task → project → workspace, tag → workspace). Results are never cached:
a cached mapping could hand out a stale or foreign workspace id.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from workspaces.domain.value_objects import ProjectId, TagId, TaskId, WorkspaceId
from workspaces.infrastructure.models import ProjectModel, TagModel, TaskModel
from workspaces.ports.repositories import IHierarchyResolver


class HierarchyResolver(IHierarchyResolver):
    """Resolves projects, tasks and tags to their workspace."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def workspace_for_project(self, project_id: ProjectId) -> WorkspaceId | None:
        stmt = select(ProjectModel.workspace_id).where(
            ProjectModel.id == project_id.value
        )
        return await self._scalar_workspace_id(stmt)

    async def workspace_for_task(self, task_id: TaskId) -> WorkspaceId | None:
        stmt = (
            select(ProjectModel.workspace_id)
            .select_from(TaskModel)
            .join(ProjectModel, ProjectModel.id == TaskModel.project_id)
            .where(TaskModel.id == task_id.value)
        )
        return await self._scalar_workspace_id(stmt)

    async def workspace_for_tag(self, tag_id: TagId) -> WorkspaceId | None:
        stmt = select(TagModel.workspace_id).where(TagModel.id == tag_id.value)
        return await self._scalar_workspace_id(stmt)

    async def _scalar_workspace_id(self, stmt) -> WorkspaceId | None:
        result = await self._session.execute(stmt)
        workspace_id = result.scalar_one_or_none()
        return WorkspaceId(value=workspace_id) if workspace_id is not None else None
