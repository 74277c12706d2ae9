"""Workspace aggregate for the workspaces context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Optional

from workspaces.domain.observability.workspace_probe import (
    DefaultWorkspaceProbe,
    WorkspaceProbe,
)
from workspaces.domain.value_objects import UserId, WorkspaceId

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 2000


@dataclass(frozen=True)
class WorkspacePatch:
    """Partial update for workspace settings.

    Fields left as None keep their current value; they are never cleared.
    """

    name: Optional[str] = None
    description: Optional[str] = None

    def is_empty(self) -> bool:
        """Check whether the patch changes nothing."""
        return self.name is None and self.description is None


@dataclass
class Workspace:
    """Workspace aggregate, the root of the resource hierarchy.

    Projects, tasks and tags all belong to exactly one workspace. Membership
    edges are held by the membership store, not by this aggregate; a
    workspace is only ever persisted together with its creator's admin
    membership.

    Business rules:
    - Workspace names must be 1-255 characters
    - Descriptions are optional and at most 2000 characters
    """

    id: WorkspaceId
    name: str
    description: Optional[str]
    created_by: UserId
    created_at: datetime
    updated_at: datetime
    _probe: WorkspaceProbe = field(
        default_factory=DefaultWorkspaceProbe,
        repr=False,
        compare=False,
    )

    def __post_init__(self) -> None:
        """Validate business rules after initialization."""
        self._validate_name(self.name)
        self._validate_description(self.description)

    def _validate_name(self, name: str) -> None:
        """Validate workspace name length."""
        if not name or not name.strip() or len(name) > NAME_MAX_LENGTH:
            raise ValueError(
                f"Workspace name must be between 1 and {NAME_MAX_LENGTH} characters"
            )

    def _validate_description(self, description: Optional[str]) -> None:
        if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(
                f"Workspace description must be at most {DESCRIPTION_MAX_LENGTH} characters"
            )

    @classmethod
    def create(
        cls,
        name: str,
        created_by: UserId,
        description: Optional[str] = None,
        probe: WorkspaceProbe | None = None,
    ) -> "Workspace":
        """Factory method for creating a new workspace.

        Generates the ID and timestamps. The caller is responsible for
        persisting the creator's admin membership in the same transaction.

        Args:
            name: The name of the workspace (1-255 characters)
            created_by: The user creating the workspace
            description: Optional free-text description
            probe: Optional observability probe for domain events

        Returns:
            A new Workspace aggregate

        Raises:
            ValueError: If name is empty or exceeds 255 characters
        """
        now = datetime.now(UTC)
        return cls(
            id=WorkspaceId.generate(),
            name=name,
            description=description,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            _probe=probe or DefaultWorkspaceProbe(),
        )

    def apply_patch(self, patch: WorkspacePatch) -> bool:
        """Apply a partial update.

        Args:
            patch: Fields to change; None fields are left untouched

        Returns:
            True if any field changed, False otherwise

        Raises:
            ValueError: If the new name or description is invalid
        """
        if patch.is_empty():
            return False

        if patch.name is not None:
            self._validate_name(patch.name)
        if patch.description is not None:
            self._validate_description(patch.description)

        changed = False
        if patch.name is not None and patch.name != self.name:
            old_name = self.name
            self.name = patch.name
            self._probe.workspace_renamed(
                workspace_id=self.id.value,
                old_name=old_name,
                new_name=patch.name,
            )
            changed = True

        if patch.description is not None and patch.description != self.description:
            self.description = patch.description
            self._probe.description_changed(workspace_id=self.id.value)
            changed = True

        if changed:
            self.updated_at = datetime.now(UTC)
        return changed
