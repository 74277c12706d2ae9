"""Domain-Oriented Observability for the workspaces application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from workspaces.application.observability.access_probe import (
    DefaultWorkspaceAccessProbe,
    WorkspaceAccessProbe,
)
from workspaces.application.observability.tag_service_probe import (
    DefaultTagServiceProbe,
    TagServiceProbe,
)
from workspaces.application.observability.workspace_service_probe import (
    DefaultWorkspaceServiceProbe,
    WorkspaceServiceProbe,
)

__all__ = [
    "DefaultTagServiceProbe",
    "DefaultWorkspaceAccessProbe",
    "DefaultWorkspaceServiceProbe",
    "TagServiceProbe",
    "WorkspaceAccessProbe",
    "WorkspaceServiceProbe",
]
