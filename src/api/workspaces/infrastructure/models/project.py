"""SQLAlchemy ORM models for the projects and tasks tables.

Project and task content is managed elsewhere; this context only needs
the foreign keys that tie a task to its project and a project to its
workspace.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class ProjectModel(Base, TimestampMixin):
    """ORM model for projects table.

    Foreign Key Constraints:
    - workspace_id references workspaces.id with CASCADE delete
    """

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    workspace_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ProjectModel(id={self.id}, workspace_id={self.workspace_id})>"


class TaskModel(Base, TimestampMixin):
    """ORM model for tasks table.

    Foreign Key Constraints:
    - project_id references projects.id with CASCADE delete
    """

    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TaskModel(id={self.id}, project_id={self.project_id})>"
