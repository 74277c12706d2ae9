"""SQLAlchemy ORM model for the workspace_memberships table."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base

MEMBERSHIP_UNIQUE_CONSTRAINT = "uq_workspace_memberships_user_workspace"


class WorkspaceMembershipModel(Base):
    """ORM model for workspace_memberships table.

    One row per (user, workspace) pair, enforced by a unique constraint so
    that concurrent inserts of the same pair cannot both succeed.

    Foreign Key Constraints:
    - workspace_id references workspaces.id with CASCADE delete
    - user_id references users.id with CASCADE delete
    """

    __tablename__ = "workspace_memberships"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    workspace_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "workspace_id", name=MEMBERSHIP_UNIQUE_CONSTRAINT),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<WorkspaceMembershipModel(workspace_id={self.workspace_id}, "
            f"user_id={self.user_id}, role={self.role})>"
        )
