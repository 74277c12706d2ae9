"""Domain aggregates for the workspaces context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from workspaces.domain.aggregates.tag import Tag
from workspaces.domain.aggregates.workspace import Workspace, WorkspacePatch

__all__ = [
    "Tag",
    "Workspace",
    "WorkspacePatch",
]
