"""SQLAlchemy implementation of IWorkspaceRepository.

Stores workspace metadata. Memberships live in the membership store and
are written by the service in the same transaction as the workspace.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from workspaces.domain.aggregates import Workspace
from workspaces.domain.value_objects import UserId, WorkspaceId
from workspaces.infrastructure.models import WorkspaceModel
from workspaces.infrastructure.observability import (
    DefaultWorkspaceRepositoryProbe,
    WorkspaceRepositoryProbe,
)
from workspaces.ports.repositories import IWorkspaceRepository


class WorkspaceRepository(IWorkspaceRepository):
    """Repository for Workspace aggregates backed by the workspaces table."""

    def __init__(
        self,
        session: AsyncSession,
        probe: WorkspaceRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession shared with the calling service
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultWorkspaceRepositoryProbe()

    async def save(self, workspace: Workspace) -> None:
        """Insert or update workspace metadata.

        Args:
            workspace: The Workspace aggregate to persist
        """
        model = await self._session.get(WorkspaceModel, workspace.id.value)

        if model:
            model.name = workspace.name
            model.description = workspace.description
            model.updated_at = workspace.updated_at
        else:
            model = WorkspaceModel(
                id=workspace.id.value,
                name=workspace.name,
                description=workspace.description,
                created_by=workspace.created_by.value,
                created_at=workspace.created_at,
                updated_at=workspace.updated_at,
            )
            self._session.add(model)

        # Flush to surface integrity errors inside the caller's transaction
        await self._session.flush()

        self._probe.workspace_saved(workspace.id.value)

    async def get_by_id(self, workspace_id: WorkspaceId) -> Workspace | None:
        """Retrieve a workspace by ID.

        Args:
            workspace_id: The unique identifier of the workspace

        Returns:
            The Workspace aggregate, or None if not found
        """
        stmt = select(WorkspaceModel).where(WorkspaceModel.id == workspace_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.workspace_not_found(workspace_id=workspace_id.value)
            return None

        return self._to_domain(model)

    async def list_by_ids(self, workspace_ids: list[WorkspaceId]) -> list[Workspace]:
        """Retrieve several workspaces ordered by name; unknown ids are skipped."""
        if not workspace_ids:
            return []

        stmt = (
            select(WorkspaceModel)
            .where(WorkspaceModel.id.in_([w.value for w in workspace_ids]))
            .order_by(WorkspaceModel.name, WorkspaceModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def delete(self, workspace_id: WorkspaceId) -> bool:
        """Delete a workspace row.

        Uses a bulk DELETE so the database's ON DELETE CASCADE removes
        projects, tasks, tags, task-tags and memberships.

        Returns:
            True if deleted, False if not found
        """
        stmt = delete(WorkspaceModel).where(WorkspaceModel.id == workspace_id.value)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return False

        self._probe.workspace_deleted(workspace_id.value)
        return True

    def _to_domain(self, model: WorkspaceModel) -> Workspace:
        """Convert a WorkspaceModel to a Workspace domain aggregate."""
        return Workspace(
            id=WorkspaceId(value=model.id),
            name=model.name,
            description=model.description,
            created_by=UserId(value=model.created_by),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
