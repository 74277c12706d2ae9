"""Workspace access checks composed from resolver, membership store and engine.

Every check resolves the target to its owning workspace, reads the actor's
current role and asks the authorization engine. Nothing is cached between
calls, so a role change takes effect on the next request.

The service does not manage transactions: its reads run in the calling
service's transaction.
"""

from __future__ import annotations

from workspaces.application.observability import (
    DefaultWorkspaceAccessProbe,
    WorkspaceAccessProbe,
)
from workspaces.domain.authorization import WorkspaceAction, can_perform
from workspaces.domain.value_objects import (
    TagId,
    TaskId,
    UserId,
    WorkspaceId,
    WorkspaceRole,
)
from workspaces.ports.repositories import IHierarchyResolver, IMembershipRepository


class WorkspaceAccessService:
    """Resolve → role → decide, for workspaces and the resources under them."""

    def __init__(
        self,
        membership_repository: IMembershipRepository,
        hierarchy_resolver: IHierarchyResolver,
        probe: WorkspaceAccessProbe | None = None,
    ):
        """Initialize WorkspaceAccessService with dependencies.

        Args:
            membership_repository: Membership store for role lookups
            hierarchy_resolver: Resolver mapping resources to workspaces
            probe: Optional domain probe for observability
        """
        self._memberships = membership_repository
        self._resolver = hierarchy_resolver
        self._probe = probe or DefaultWorkspaceAccessProbe()

    async def role_in(
        self, user_id: UserId, workspace_id: WorkspaceId
    ) -> WorkspaceRole | None:
        """Return the user's current role in the workspace, or None."""
        return await self._memberships.get_role(user_id, workspace_id)

    async def authorize(
        self,
        user_id: UserId,
        workspace_id: WorkspaceId,
        action: WorkspaceAction,
    ) -> WorkspaceRole | None:
        """Check an action in a workspace and return the role that allows it.

        Args:
            user_id: The acting user
            workspace_id: The target workspace
            action: The requested action

        Returns:
            The user's role if the action is allowed, otherwise None
        """
        role = await self._memberships.get_role(user_id, workspace_id)
        if self._decide(user_id, workspace_id, role, action):
            return role
        return None

    async def can_act_on_workspace(
        self,
        user_id: UserId,
        workspace_id: WorkspaceId,
        action: WorkspaceAction,
    ) -> bool:
        """Check whether the user may perform the action in the workspace.

        Returns:
            True if allowed; False for non-members and insufficient roles
        """
        return await self.authorize(user_id, workspace_id, action) is not None

    async def workspace_for_task_if_allowed(
        self,
        user_id: UserId,
        task_id: TaskId,
        action: WorkspaceAction,
    ) -> WorkspaceId | None:
        """Resolve a task's workspace and check the action against it.

        Returns:
            The task's workspace when the action is allowed, otherwise None
            (task missing, not a member, or role insufficient)
        """
        workspace_id = await self._resolver.workspace_for_task(task_id)
        if workspace_id is None:
            self._probe.access_denied(
                actor_id=user_id.value,
                workspace_id=None,
                action=action.value,
                reason="task_not_found",
            )
            return None

        if not await self.can_act_on_workspace(user_id, workspace_id, action):
            return None
        return workspace_id

    async def can_act_on_task(
        self,
        user_id: UserId,
        task_id: TaskId,
        action: WorkspaceAction,
    ) -> bool:
        """Check an action against the workspace owning a task."""
        return (
            await self.workspace_for_task_if_allowed(user_id, task_id, action)
            is not None
        )

    async def can_act_on_tag(
        self,
        user_id: UserId,
        tag_id: TagId,
        action: WorkspaceAction,
    ) -> bool:
        """Check an action against the workspace owning a tag."""
        workspace_id = await self._resolver.workspace_for_tag(tag_id)
        if workspace_id is None:
            self._probe.access_denied(
                actor_id=user_id.value,
                workspace_id=None,
                action=action.value,
                reason="tag_not_found",
            )
            return False
        return await self.can_act_on_workspace(user_id, workspace_id, action)

    def _decide(
        self,
        user_id: UserId,
        workspace_id: WorkspaceId,
        role: WorkspaceRole | None,
        action: WorkspaceAction,
    ) -> bool:
        if can_perform(role, action):
            assert role is not None
            self._probe.access_granted(
                actor_id=user_id.value,
                workspace_id=workspace_id.value,
                action=action.value,
                role=role.value,
            )
            return True

        self._probe.access_denied(
            actor_id=user_id.value,
            workspace_id=workspace_id.value,
            action=action.value,
            reason="not_a_member" if role is None else f"role_{role.value}",
        )
        return False
