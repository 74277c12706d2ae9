"""Read-only user directory backed by the users table.

Users are created and edited by the identity subsystem; this adapter only
resolves ids and email addresses.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from workspaces.domain.value_objects import User, UserId
from workspaces.infrastructure.models import UserModel
from workspaces.ports.collaborators import IUserDirectory


class SqlUserDirectory(IUserDirectory):
    """User lookups against the shared users table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_user_by_id(self, user_id: UserId) -> User | None:
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def get_users_by_ids(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Resolve many users in one query; unknown ids are left out."""
        if not user_ids:
            return {}

        stmt = select(UserModel).where(
            UserModel.id.in_([user_id.value for user_id in user_ids])
        )
        result = await self._session.execute(stmt)
        users = (self._to_domain(model) for model in result.scalars().all())
        return {user.id: user for user in users if user is not None}

    async def get_user_by_email(self, email: str) -> User | None:
        """Find a user by email, ignoring case and surrounding whitespace."""
        normalized = email.strip().lower()
        if not normalized:
            return None

        stmt = select(UserModel).where(func.lower(UserModel.email) == normalized)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    def _to_domain(self, model: UserModel | None) -> User | None:
        if model is None:
            return None
        return User(
            id=UserId(value=model.id),
            full_name=model.full_name,
            email=model.email,
        )
