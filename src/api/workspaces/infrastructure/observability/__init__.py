"""Domain-Oriented Observability for the workspaces infrastructure layer."""

from workspaces.infrastructure.observability.repository_probe import (
    DefaultMembershipRepositoryProbe,
    DefaultTagRepositoryProbe,
    DefaultWorkspaceRepositoryProbe,
    MembershipRepositoryProbe,
    TagRepositoryProbe,
    WorkspaceRepositoryProbe,
)

__all__ = [
    "DefaultMembershipRepositoryProbe",
    "DefaultTagRepositoryProbe",
    "DefaultWorkspaceRepositoryProbe",
    "MembershipRepositoryProbe",
    "TagRepositoryProbe",
    "WorkspaceRepositoryProbe",
]
