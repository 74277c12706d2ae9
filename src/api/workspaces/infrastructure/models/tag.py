"""SQLAlchemy ORM models for the tags and task_tags tables."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base


class TagModel(Base):
    """ORM model for tags table.

    Foreign Key Constraints:
    - workspace_id references workspaces.id with CASCADE delete
    - created_by references users.id with RESTRICT delete
    """

    __tablename__ = "tags"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    workspace_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(String(32), nullable=False)
    created_by: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TagModel(id={self.id}, workspace_id={self.workspace_id}, name={self.name})>"


class TaskTagModel(Base):
    """ORM model for task_tags table (existence-only edge).

    The composite primary key makes each (task, tag) pair unique.
    """

    __tablename__ = "task_tags"

    task_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tasks.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TaskTagModel(task_id={self.task_id}, tag_id={self.tag_id})>"
