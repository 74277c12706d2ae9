"""Workspace application service for the workspaces bounded context.

Orchestrates the workspace lifecycle and membership changes. Every
operation takes the acting user explicitly, re-reads that user's role
from the membership store and runs in a single transaction.

Denied and not-found outcomes are returned as False/None so callers cannot
tell a refusal from a request with nothing to do; the reason is recorded
by the probes only.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.settings import get_workspace_settings
from workspaces.application.observability import (
    DefaultWorkspaceServiceProbe,
    WorkspaceServiceProbe,
)
from workspaces.application.services.access_service import WorkspaceAccessService
from workspaces.application.value_objects import MemberView, WorkspaceView
from workspaces.domain.aggregates import Workspace, WorkspacePatch
from workspaces.domain.authorization import WorkspaceAction, can_perform
from workspaces.domain.value_objects import (
    TaskId,
    UserId,
    WorkspaceId,
    WorkspaceRole,
)
from workspaces.ports.collaborators import (
    INotificationSink,
    IUserDirectory,
    NotificationType,
)
from workspaces.ports.exceptions import (
    DuplicateMembershipError,
    UserNotFoundError,
    WorkspaceCreationError,
)
from workspaces.ports.repositories import IMembershipRepository, IWorkspaceRepository


class WorkspaceService:
    """Application service for workspace lifecycle and membership management."""

    def __init__(
        self,
        session: AsyncSession,
        workspace_repository: IWorkspaceRepository,
        membership_repository: IMembershipRepository,
        access: WorkspaceAccessService,
        user_directory: IUserDirectory,
        notification_sink: INotificationSink,
        probe: WorkspaceServiceProbe | None = None,
        protect_last_admin: bool | None = None,
    ):
        """Initialize WorkspaceService with dependencies.

        Args:
            session: Database session for transaction management
            workspace_repository: Repository for workspace persistence
            membership_repository: Membership store
            access: Access checks (resolver + membership store + engine)
            user_directory: Lookup of users by id and email
            notification_sink: Receives membership change notifications
            probe: Optional domain probe for observability
            protect_last_admin: Refuse to remove a workspace's last admin.
                Defaults to TASKBOARD_WORKSPACE_PROTECT_LAST_ADMIN.
        """
        self._session = session
        self._workspace_repository = workspace_repository
        self._memberships = membership_repository
        self._access = access
        self._user_directory = user_directory
        self._notification_sink = notification_sink
        self._probe = probe or DefaultWorkspaceServiceProbe()
        if protect_last_admin is None:
            protect_last_admin = get_workspace_settings().protect_last_admin
        self._protect_last_admin = protect_last_admin

    async def create_workspace(
        self,
        creator_id: UserId,
        name: str,
        description: str | None = None,
    ) -> Workspace:
        """Create a workspace and make its creator an admin.

        The workspace row and the creator's admin membership are written in
        one transaction. If either write fails both are rolled back, so a
        workspace without an admin is never visible.

        Args:
            creator_id: User creating the workspace
            name: Workspace name (1-255 characters)
            description: Optional description

        Returns:
            The created Workspace aggregate

        Raises:
            UserNotFoundError: If the creator does not exist; checked before
                the name and description
            ValueError: If name or description is invalid
            WorkspaceCreationError: If persisting the workspace or the
                membership failed; the cause is chained
        """
        try:
            async with self._session.begin():
                creator = await self._user_directory.get_user_by_id(creator_id)
                if creator is None:
                    raise UserNotFoundError(f"User {creator_id.value} not found")

                workspace = Workspace.create(
                    name=name,
                    created_by=creator_id,
                    description=description,
                )
                await self._workspace_repository.save(workspace)
                await self._memberships.add_member(
                    workspace.id, creator_id, WorkspaceRole.ADMIN
                )
        except (UserNotFoundError, ValueError):
            raise
        except Exception as e:
            self._probe.workspace_creation_failed(
                creator_id=creator_id.value,
                name=name,
                error=str(e),
            )
            raise WorkspaceCreationError(
                "Error creating workspace and admin membership"
            ) from e

        self._probe.workspace_created(
            workspace_id=workspace.id.value,
            name=workspace.name,
            creator_id=creator_id.value,
        )
        return workspace

    async def get_workspace(
        self,
        requester_id: UserId,
        workspace_id: WorkspaceId,
    ) -> WorkspaceView | None:
        """Get a workspace together with the requester's role.

        Returns:
            The view, or None if the workspace does not exist or the
            requester is not a member
        """
        async with self._session.begin():
            role = await self._access.authorize(
                requester_id, workspace_id, WorkspaceAction.VIEW_WORKSPACE
            )
            if role is None:
                return None

            workspace = await self._workspace_repository.get_by_id(workspace_id)

        if workspace is None:
            self._probe.workspace_not_found(workspace_id=workspace_id.value)
            return None
        return WorkspaceView(workspace=workspace, role=role)

    async def list_workspaces(self, requester_id: UserId) -> list[WorkspaceView]:
        """List every workspace the requester belongs to, ordered by name."""
        async with self._session.begin():
            memberships = await self._memberships.list_by_user(requester_id)
            roles = {
                m.workspace_id: m.role
                for m in memberships
                if can_perform(m.role, WorkspaceAction.VIEW_WORKSPACE)
            }
            workspaces = await self._workspace_repository.list_by_ids(list(roles))

        views = [WorkspaceView(workspace=w, role=roles[w.id]) for w in workspaces]
        self._probe.workspaces_listed(user_id=requester_id.value, count=len(views))
        return views

    async def update_workspace(
        self,
        requester_id: UserId,
        workspace_id: WorkspaceId,
        patch: WorkspacePatch,
    ) -> Workspace | None:
        """Apply a partial update to workspace settings.

        Fields left as None in the patch keep their current values.

        Returns:
            The updated workspace, or None if the requester is not an admin
            or the workspace does not exist

        Raises:
            ValueError: If a patched value is invalid
        """
        async with self._session.begin():
            if not await self._access.can_act_on_workspace(
                requester_id, workspace_id, WorkspaceAction.UPDATE_WORKSPACE
            ):
                return None

            workspace = await self._workspace_repository.get_by_id(workspace_id)
            if workspace is None:
                self._probe.workspace_not_found(workspace_id=workspace_id.value)
                return None

            changed = workspace.apply_patch(patch)
            if changed:
                await self._workspace_repository.save(workspace)

        self._probe.workspace_updated(
            workspace_id=workspace_id.value,
            acting_user_id=requester_id.value,
            changed=changed,
        )
        return workspace

    async def delete_workspace(
        self,
        requester_id: UserId,
        workspace_id: WorkspaceId,
    ) -> bool:
        """Delete a workspace and, through storage cascades, everything in it.

        Returns:
            True if deleted; False if the requester is not an admin or the
            workspace does not exist
        """
        async with self._session.begin():
            if not await self._access.can_act_on_workspace(
                requester_id, workspace_id, WorkspaceAction.DELETE_WORKSPACE
            ):
                return False

            deleted = await self._workspace_repository.delete(workspace_id)

        if deleted:
            self._probe.workspace_deleted(
                workspace_id=workspace_id.value,
                acting_user_id=requester_id.value,
            )
        return deleted

    async def add_member(
        self,
        requester_id: UserId,
        workspace_id: WorkspaceId,
        target_email: str,
        role: WorkspaceRole,
    ) -> bool:
        """Add the user with the given email to a workspace.

        The target is notified after the membership is committed. A failed
        notification is logged and does not undo the membership.

        Returns:
            True if the membership was created; False if the requester is not
            an admin, the workspace or email is unknown, or the target is
            already a member
        """
        try:
            async with self._session.begin():
                if not await self._access.can_act_on_workspace(
                    requester_id, workspace_id, WorkspaceAction.ADD_MEMBER
                ):
                    return False

                workspace = await self._workspace_repository.get_by_id(workspace_id)
                if workspace is None:
                    self._probe.workspace_not_found(workspace_id=workspace_id.value)
                    return False

                target = await self._user_directory.get_user_by_email(target_email)
                if target is None:
                    self._reject(workspace_id, requester_id, "add_member", "user_not_found")
                    return False

                if await self._memberships.get_role(target.id, workspace_id) is not None:
                    self._reject(workspace_id, requester_id, "add_member", "already_member")
                    return False

                await self._memberships.add_member(workspace_id, target.id, role)
        except DuplicateMembershipError:
            # A concurrent request inserted the same pair first
            self._reject(workspace_id, requester_id, "add_member", "already_member")
            return False

        self._probe.workspace_member_added(
            workspace_id=workspace_id.value,
            member_id=target.id.value,
            role=role.value,
            acting_user_id=requester_id.value,
        )
        await self._notify(
            target.id,
            NotificationType.USER_ADDED_TO_WORKSPACE,
            f"You have been added to the workspace '{workspace.name}'.",
        )
        return True

    async def remove_member(
        self,
        requester_id: UserId,
        workspace_id: WorkspaceId,
        target_user_id: UserId,
    ) -> bool:
        """Remove a user's membership from a workspace.

        Removing oneself also requires the admin role.

        Returns:
            True if removed; False if the requester is not an admin, the
            target is not a member, or the last-admin guard refused it
        """
        async with self._session.begin():
            if not await self._access.can_act_on_workspace(
                requester_id, workspace_id, WorkspaceAction.REMOVE_MEMBER
            ):
                return False

            if self._protect_last_admin and await self._is_last_admin(
                target_user_id, workspace_id
            ):
                self._reject(workspace_id, requester_id, "remove_member", "last_admin")
                return False

            removed = await self._memberships.remove_member(workspace_id, target_user_id)
            if not removed:
                self._reject(workspace_id, requester_id, "remove_member", "not_a_member")
                return False

            workspace = await self._workspace_repository.get_by_id(workspace_id)

        self._probe.workspace_member_removed(
            workspace_id=workspace_id.value,
            member_id=target_user_id.value,
            acting_user_id=requester_id.value,
        )
        if workspace is not None:
            await self._notify(
                target_user_id,
                NotificationType.USER_REMOVED_FROM_WORKSPACE,
                f"You have been removed from the workspace '{workspace.name}'.",
            )
        return True

    async def list_members(
        self,
        requester_id: UserId,
        workspace_id: WorkspaceId,
    ) -> list[MemberView] | None:
        """List the members of a workspace with directory details.

        Members missing from the user directory are skipped.

        Returns:
            The members, or None if the requester is not a member
        """
        async with self._session.begin():
            if not await self._access.can_act_on_workspace(
                requester_id, workspace_id, WorkspaceAction.VIEW_MEMBERS
            ):
                return None

            memberships = await self._memberships.list_by_workspace(workspace_id)
            users = await self._user_directory.get_users_by_ids(
                [m.user_id for m in memberships]
            )

        members: list[MemberView] = []
        for membership in memberships:
            user = users.get(membership.user_id)
            if user is None:
                continue
            members.append(
                MemberView(
                    user_id=user.id,
                    full_name=user.full_name,
                    email=user.email,
                    role=membership.role,
                    joined_at=membership.joined_at,
                )
            )
        return members

    async def count_workspaces_by_role(
        self, requester_id: UserId
    ) -> dict[WorkspaceRole, int]:
        """Count the requester's workspaces per role, for dashboards."""
        async with self._session.begin():
            return await self._memberships.count_by_role(requester_id)

    async def is_workspace_admin(
        self,
        requester_id: UserId,
        workspace_id: WorkspaceId,
    ) -> bool:
        """Check whether the requester currently holds admin in the workspace."""
        async with self._session.begin():
            role = await self._access.role_in(requester_id, workspace_id)
        return role == WorkspaceRole.ADMIN

    async def has_access_to_task_workspace(
        self,
        requester_id: UserId,
        task_id: TaskId,
    ) -> bool:
        """Check whether the requester is a member of the workspace owning a task."""
        async with self._session.begin():
            return await self._access.can_act_on_task(
                requester_id, task_id, WorkspaceAction.VIEW_WORKSPACE
            )

    async def _is_last_admin(self, user_id: UserId, workspace_id: WorkspaceId) -> bool:
        role = await self._memberships.get_role(user_id, workspace_id)
        if role != WorkspaceRole.ADMIN:
            return False
        return await self._memberships.count_admins(workspace_id) <= 1

    def _reject(
        self,
        workspace_id: WorkspaceId,
        requester_id: UserId,
        operation: str,
        reason: str,
    ) -> None:
        self._probe.membership_change_rejected(
            workspace_id=workspace_id.value,
            acting_user_id=requester_id.value,
            operation=operation,
            reason=reason,
        )

    async def _notify(
        self,
        target_user_id: UserId,
        event_type: NotificationType,
        message: str,
    ) -> None:
        """Hand a notification to the sink; failures never reach the caller."""
        try:
            await self._notification_sink.notify(target_user_id, event_type, message)
        except Exception as e:
            self._probe.notification_failed(
                target_user_id=target_user_id.value,
                event_type=event_type.value,
                error=str(e),
            )
