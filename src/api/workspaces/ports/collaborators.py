"""Protocols for collaborators owned by other subsystems.

The user directory belongs to the identity subsystem and notification
delivery belongs to the notification subsystem. This context only reads
users and hands notifications off.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol, runtime_checkable

from workspaces.domain.value_objects import User, UserId


class NotificationType(StrEnum):
    """Notification events emitted on membership changes."""

    USER_ADDED_TO_WORKSPACE = "user_added_to_workspace"
    USER_REMOVED_FROM_WORKSPACE = "user_removed_from_workspace"


@runtime_checkable
class IUserDirectory(Protocol):
    """Read-only access to users."""

    async def get_user_by_id(self, user_id: UserId) -> User | None:
        """Return the user, or None if unknown."""
        ...

    async def get_user_by_email(self, email: str) -> User | None:
        """Return the user with this email, or None if unknown."""
        ...

    async def get_users_by_ids(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Return the known users among user_ids, keyed by id."""
        ...


@runtime_checkable
class INotificationSink(Protocol):
    """Fire-and-forget notification hand-off.

    Implementations must not join the caller's transaction. Callers treat
    any failure as non-fatal.
    """

    async def notify(
        self,
        target_user_id: UserId,
        event_type: NotificationType,
        message: str,
    ) -> None:
        """Record a notification for the target user."""
        ...
