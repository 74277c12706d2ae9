"""Application-layer value objects for the workspaces context.

Read-only views returned by the services. They combine aggregate data with
the caller's membership so the presentation layer needs no extra lookups.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from workspaces.domain.aggregates import Workspace
from workspaces.domain.value_objects import UserId, WorkspaceRole


@dataclass(frozen=True)
class WorkspaceView:
    """A workspace as seen by one of its members.

    Attributes:
        workspace: The workspace aggregate
        role: The requesting user's role in the workspace
    """

    workspace: Workspace
    role: WorkspaceRole


@dataclass(frozen=True)
class MemberView:
    """A workspace member with directory details.

    Attributes:
        user_id: The member's user ID
        full_name: Display name from the user directory
        email: Email from the user directory
        role: The member's role in the workspace
        joined_at: When the membership was created
    """

    user_id: UserId
    full_name: str
    email: str
    role: WorkspaceRole
    joined_at: datetime
