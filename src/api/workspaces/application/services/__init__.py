"""Application services for the workspaces bounded context."""

from workspaces.application.services.access_service import WorkspaceAccessService
from workspaces.application.services.tag_service import TagService
from workspaces.application.services.workspace_service import WorkspaceService

__all__ = [
    "TagService",
    "WorkspaceAccessService",
    "WorkspaceService",
]
