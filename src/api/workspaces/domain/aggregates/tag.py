"""Tag aggregate for the workspaces context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from workspaces.domain.value_objects import TagId, UserId, WorkspaceId

NAME_MAX_LENGTH = 100
COLOR_MAX_LENGTH = 32


@dataclass
class Tag:
    """A label scoped to one workspace.

    Tags may only be attached to tasks whose project lives in the same
    workspace as the tag.

    Business rules:
    - Tag names must be 1-100 characters
    - Colors are free-form strings of at most 32 characters (e.g. "#ff8800")
    """

    id: TagId
    workspace_id: WorkspaceId
    name: str
    color: str
    created_by: UserId
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip() or len(self.name) > NAME_MAX_LENGTH:
            raise ValueError(f"Tag name must be between 1 and {NAME_MAX_LENGTH} characters")
        if len(self.color) > COLOR_MAX_LENGTH:
            raise ValueError(f"Tag color must be at most {COLOR_MAX_LENGTH} characters")

    @classmethod
    def create(
        cls,
        workspace_id: WorkspaceId,
        name: str,
        color: str,
        created_by: UserId,
    ) -> "Tag":
        """Create a new tag in a workspace.

        Raises:
            ValueError: If name or color is invalid
        """
        return cls(
            id=TagId.generate(),
            workspace_id=workspace_id,
            name=name,
            color=color,
            created_by=created_by,
            created_at=datetime.now(UTC),
        )

    def belongs_to(self, workspace_id: WorkspaceId) -> bool:
        """Check whether this tag is scoped to the given workspace."""
        return self.workspace_id == workspace_id
