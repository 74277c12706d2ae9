"""Domain probes for workspaces aggregates."""

from workspaces.domain.observability.workspace_probe import (
    DefaultWorkspaceProbe,
    WorkspaceProbe,
)

__all__ = [
    "DefaultWorkspaceProbe",
    "WorkspaceProbe",
]
