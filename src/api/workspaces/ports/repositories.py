"""Repository protocols (ports) for the workspaces bounded context.

Repository protocols define the interface for persisting and retrieving
workspace data. Implementations share the caller's AsyncSession so that a
service can group several writes in one transaction.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from workspaces.domain.aggregates import Tag, Workspace
from workspaces.domain.value_objects import (
    Membership,
    ProjectId,
    TagId,
    TaskId,
    UserId,
    WorkspaceId,
    WorkspaceRole,
)


@runtime_checkable
class IMembershipRepository(Protocol):
    """Membership store: the user × workspace relation with one role per edge."""

    async def get_role(
        self, user_id: UserId, workspace_id: WorkspaceId
    ) -> WorkspaceRole | None:
        """Look up a user's role in a workspace.

        Args:
            user_id: The user
            workspace_id: The workspace

        Returns:
            The role, or None if the user is not a member
        """
        ...

    async def add_member(
        self,
        workspace_id: WorkspaceId,
        user_id: UserId,
        role: WorkspaceRole,
    ) -> Membership:
        """Insert a membership.

        Args:
            workspace_id: The workspace
            user_id: The user to add
            role: The role to grant

        Returns:
            The stored Membership

        Raises:
            DuplicateMembershipError: If the user is already a member
        """
        ...

    async def remove_member(self, workspace_id: WorkspaceId, user_id: UserId) -> bool:
        """Delete a membership.

        Returns:
            True if removed, False if no such membership existed
        """
        ...

    async def count_by_role(self, user_id: UserId) -> dict[WorkspaceRole, int]:
        """Count a user's memberships grouped by role across all workspaces.

        Roles the user does not hold anywhere are omitted.
        """
        ...

    async def count_admins(self, workspace_id: WorkspaceId) -> int:
        """Count the admins of a workspace."""
        ...

    async def list_by_workspace(self, workspace_id: WorkspaceId) -> list[Membership]:
        """List all memberships of a workspace, oldest first."""
        ...

    async def list_by_user(self, user_id: UserId) -> list[Membership]:
        """List all memberships held by a user, oldest first."""
        ...


@runtime_checkable
class IWorkspaceRepository(Protocol):
    """Repository for Workspace aggregate persistence."""

    async def save(self, workspace: Workspace) -> None:
        """Insert or update a workspace.

        Args:
            workspace: The Workspace aggregate to persist
        """
        ...

    async def get_by_id(self, workspace_id: WorkspaceId) -> Workspace | None:
        """Retrieve a workspace by ID.

        Returns:
            The Workspace aggregate, or None if not found
        """
        ...

    async def list_by_ids(self, workspace_ids: list[WorkspaceId]) -> list[Workspace]:
        """Retrieve several workspaces; unknown ids are skipped."""
        ...

    async def delete(self, workspace_id: WorkspaceId) -> bool:
        """Delete a workspace.

        Projects, tasks, tags and memberships are removed by the storage
        layer's cascading foreign keys.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class ITagRepository(Protocol):
    """Repository for tags and task-tag edges."""

    async def save(self, tag: Tag) -> None:
        """Insert a tag."""
        ...

    async def get_by_id(self, tag_id: TagId) -> Tag | None:
        """Retrieve a tag by ID, or None if not found."""
        ...

    async def list_by_workspace(self, workspace_id: WorkspaceId) -> list[Tag]:
        """List the tags of a workspace ordered by name."""
        ...

    async def assign(self, task_id: TaskId, tag_id: TagId) -> None:
        """Attach a tag to a task.

        Raises:
            DuplicateTaskTagError: If the tag is already attached
        """
        ...

    async def list_for_task(self, task_id: TaskId) -> list[Tag]:
        """List the tags attached to a task."""
        ...


@runtime_checkable
class IHierarchyResolver(Protocol):
    """Resolves leaf resources to the workspace that owns them.

    Each method walks the hierarchy in a single query and never caches.
    """

    async def workspace_for_project(self, project_id: ProjectId) -> WorkspaceId | None:
        """Return the project's workspace, or None if the project does not exist."""
        ...

    async def workspace_for_task(self, task_id: TaskId) -> WorkspaceId | None:
        """Return the task's workspace (task → project → workspace), or None."""
        ...

    async def workspace_for_tag(self, tag_id: TagId) -> WorkspaceId | None:
        """Return the tag's workspace, or None if the tag does not exist."""
        ...
