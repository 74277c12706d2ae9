"""Notification sink writing notification rows in a separate transaction.

The sink opens its own session so a notification is never part of the
transaction that produced it: a failed insert here cannot roll back the
membership change, and a rolled-back membership change is never notified
because services only notify after commit.
"""

from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from ulid import ULID

from workspaces.domain.value_objects import UserId
from workspaces.infrastructure.models import NotificationModel
from workspaces.ports.collaborators import INotificationSink, NotificationType


class SqlNotificationSink(INotificationSink):
    """Persists notifications for the notification subsystem to deliver."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the sink.

        Args:
            session_factory: Factory for the sink's own sessions
            logger: Optional structlog logger
        """
        self._session_factory = session_factory
        self._logger = logger or structlog.get_logger()

    async def notify(
        self,
        target_user_id: UserId,
        event_type: NotificationType,
        message: str,
    ) -> None:
        notification_id = str(ULID())
        async with self._session_factory() as session:
            async with session.begin():
                session.add(
                    NotificationModel(
                        id=notification_id,
                        user_id=target_user_id.value,
                        event_type=event_type.value,
                        message=message,
                        is_read=False,
                    )
                )

        self._logger.debug(
            "notification_recorded",
            notification_id=notification_id,
            user_id=target_user_id.value,
            event_type=event_type.value,
        )
