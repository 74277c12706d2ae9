"""SQLAlchemy ORM models for the workspaces bounded context.

These models map to database tables and are used by repository implementations.
"""

from workspaces.infrastructure.models.membership import WorkspaceMembershipModel
from workspaces.infrastructure.models.notification import NotificationModel
from workspaces.infrastructure.models.project import ProjectModel, TaskModel
from workspaces.infrastructure.models.tag import TagModel, TaskTagModel
from workspaces.infrastructure.models.user import UserModel
from workspaces.infrastructure.models.workspace import WorkspaceModel

__all__ = [
    "NotificationModel",
    "ProjectModel",
    "TagModel",
    "TaskModel",
    "TaskTagModel",
    "UserModel",
    "WorkspaceMembershipModel",
    "WorkspaceModel",
]
