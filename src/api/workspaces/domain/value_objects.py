"""Value objects for the workspaces domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import ClassVar, TypeVar

from ulid import ULID

_IdT = TypeVar("_IdT", bound="_UlidId")


@dataclass(frozen=True)
class _UlidId:
    """Base for ULID-backed identifiers.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    _label: ClassVar[str] = "Id"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls: type[_IdT]) -> _IdT:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls: type[_IdT], value: str) -> _IdT:
        """Create an identifier from a string value.

        Args:
            value: ULID string

        Returns:
            Identifier instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls._label}: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class UserId(_UlidId):
    """Identifier for a user owned by the identity subsystem."""

    _label: ClassVar[str] = "UserId"


@dataclass(frozen=True)
class WorkspaceId(_UlidId):
    """Identifier for a Workspace, the root of the resource hierarchy."""

    _label: ClassVar[str] = "WorkspaceId"


@dataclass(frozen=True)
class ProjectId(_UlidId):
    """Identifier for a Project inside a workspace."""

    _label: ClassVar[str] = "ProjectId"


@dataclass(frozen=True)
class TaskId(_UlidId):
    """Identifier for a Task inside a project."""

    _label: ClassVar[str] = "TaskId"


@dataclass(frozen=True)
class TagId(_UlidId):
    """Identifier for a workspace-scoped Tag."""

    _label: ClassVar[str] = "TagId"


class WorkspaceRole(StrEnum):
    """Roles a user can hold in a workspace.

    Serialized as lowercase text at the storage boundary. The permissions
    attached to each role live in workspaces.domain.authorization.
    """

    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


@dataclass(frozen=True)
class Membership:
    """A user's membership in a workspace.

    At most one membership (and so one role) exists per user and workspace.
    """

    workspace_id: WorkspaceId
    user_id: UserId
    role: WorkspaceRole
    joined_at: datetime


@dataclass(frozen=True)
class User:
    """Read-only view of a user from the user directory."""

    id: UserId
    full_name: str
    email: str
