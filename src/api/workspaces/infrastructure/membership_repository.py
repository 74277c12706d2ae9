"""SQLAlchemy implementation of IMembershipRepository.

The membership store holds the user × workspace relation. Uniqueness of the
(user, workspace) pair is enforced by the database; a violating insert is
translated to DuplicateMembershipError so storage exceptions never leak to
callers.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from workspaces.domain.value_objects import (
    Membership,
    UserId,
    WorkspaceId,
    WorkspaceRole,
)
from workspaces.infrastructure.models import WorkspaceMembershipModel
from workspaces.infrastructure.models.membership import MEMBERSHIP_UNIQUE_CONSTRAINT
from workspaces.infrastructure.observability import (
    DefaultMembershipRepositoryProbe,
    MembershipRepositoryProbe,
)
from workspaces.ports.exceptions import DuplicateMembershipError
from workspaces.ports.repositories import IMembershipRepository


def is_duplicate_membership(error: IntegrityError) -> bool:
    """Check whether an IntegrityError came from the membership uniqueness constraint.

    PostgreSQL reports the constraint name; SQLite reports the table and
    columns instead.
    """
    message = str(error)
    return MEMBERSHIP_UNIQUE_CONSTRAINT in message or (
        "UNIQUE constraint failed: workspace_memberships" in message
    )


class MembershipRepository(IMembershipRepository):
    """Membership store backed by the workspace_memberships table.

    Every read goes to the database; roles are never cached, so a
    permission check always sees the current membership.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: MembershipRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession shared with the calling service
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultMembershipRepositoryProbe()

    async def get_role(
        self, user_id: UserId, workspace_id: WorkspaceId
    ) -> WorkspaceRole | None:
        """Look up a user's role in a workspace."""
        stmt = select(WorkspaceMembershipModel.role).where(
            WorkspaceMembershipModel.user_id == user_id.value,
            WorkspaceMembershipModel.workspace_id == workspace_id.value,
        )
        result = await self._session.execute(stmt)
        role = result.scalar_one_or_none()
        return WorkspaceRole(role) if role is not None else None

    async def add_member(
        self,
        workspace_id: WorkspaceId,
        user_id: UserId,
        role: WorkspaceRole,
    ) -> Membership:
        """Insert a membership, raising DuplicateMembershipError on conflict."""
        joined_at = datetime.now(UTC)
        model = WorkspaceMembershipModel(
            id=str(ULID()),
            workspace_id=workspace_id.value,
            user_id=user_id.value,
            role=role.value,
            joined_at=joined_at,
        )
        self._session.add(model)

        # Flush so the uniqueness constraint is checked now, not at commit
        try:
            await self._session.flush()
        except IntegrityError as e:
            if is_duplicate_membership(e):
                self._probe.duplicate_membership(workspace_id.value, user_id.value)
                raise DuplicateMembershipError(
                    f"User {user_id.value} is already a member of workspace "
                    f"{workspace_id.value}"
                ) from e
            raise

        self._probe.membership_added(workspace_id.value, user_id.value, role.value)
        return Membership(
            workspace_id=workspace_id,
            user_id=user_id,
            role=role,
            joined_at=joined_at,
        )

    async def remove_member(self, workspace_id: WorkspaceId, user_id: UserId) -> bool:
        """Delete a membership; False if it did not exist."""
        stmt = delete(WorkspaceMembershipModel).where(
            WorkspaceMembershipModel.workspace_id == workspace_id.value,
            WorkspaceMembershipModel.user_id == user_id.value,
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            return False

        self._probe.membership_removed(workspace_id.value, user_id.value)
        return True

    async def count_by_role(self, user_id: UserId) -> dict[WorkspaceRole, int]:
        """Count a user's memberships grouped by role."""
        stmt = (
            select(WorkspaceMembershipModel.role, func.count())
            .where(WorkspaceMembershipModel.user_id == user_id.value)
            .group_by(WorkspaceMembershipModel.role)
        )
        result = await self._session.execute(stmt)
        return {WorkspaceRole(role): count for role, count in result.all()}

    async def count_admins(self, workspace_id: WorkspaceId) -> int:
        """Count the admins of a workspace."""
        stmt = select(func.count()).where(
            WorkspaceMembershipModel.workspace_id == workspace_id.value,
            WorkspaceMembershipModel.role == WorkspaceRole.ADMIN.value,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def list_by_workspace(self, workspace_id: WorkspaceId) -> list[Membership]:
        """List all memberships of a workspace, oldest first."""
        stmt = (
            select(WorkspaceMembershipModel)
            .where(WorkspaceMembershipModel.workspace_id == workspace_id.value)
            .order_by(WorkspaceMembershipModel.joined_at, WorkspaceMembershipModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def list_by_user(self, user_id: UserId) -> list[Membership]:
        """List all memberships held by a user, oldest first."""
        stmt = (
            select(WorkspaceMembershipModel)
            .where(WorkspaceMembershipModel.user_id == user_id.value)
            .order_by(WorkspaceMembershipModel.joined_at, WorkspaceMembershipModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    def _to_domain(self, model: WorkspaceMembershipModel) -> Membership:
        """Convert a membership row to a Membership value object."""
        return Membership(
            workspace_id=WorkspaceId(value=model.workspace_id),
            user_id=UserId(value=model.user_id),
            role=WorkspaceRole(model.role),
            joined_at=model.joined_at,
        )
