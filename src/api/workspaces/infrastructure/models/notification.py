"""SQLAlchemy ORM model for the notifications table."""

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class NotificationModel(Base, TimestampMixin):
    """ORM model for notifications table.

    Rows are written by the notification sink outside of the transaction
    that produced them; delivery is handled by the notification subsystem.
    """

    __tablename__ = "notifications"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_type: Mapped[str] = mapped_column(String(64), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<NotificationModel(id={self.id}, user_id={self.user_id}, "
            f"event_type={self.event_type})>"
        )
