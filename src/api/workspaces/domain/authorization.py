"""Authorization engine for workspace roles.

A pure decision function over a single role table. Callers resolve the
target resource to its workspace and look up the actor's role first; this
module only answers whether that role may perform the action.

Decisions are deny-by-default: an absent role, an unknown role, or an action
missing from the role's row is refused.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Mapping

from workspaces.domain.value_objects import WorkspaceRole


class WorkspaceAction(StrEnum):
    """Actions that can be requested against a workspace or its content."""

    VIEW_WORKSPACE = "view_workspace"
    VIEW_MEMBERS = "view_members"
    VIEW_TAGS = "view_tags"
    CREATE_WORKSPACE = "create_workspace"
    UPDATE_WORKSPACE = "update_workspace"
    DELETE_WORKSPACE = "delete_workspace"
    ADD_MEMBER = "add_member"
    REMOVE_MEMBER = "remove_member"
    CREATE_TAG = "create_tag"
    ASSIGN_TAG = "assign_tag"


_READ_ACTIONS = frozenset(
    {
        WorkspaceAction.VIEW_WORKSPACE,
        WorkspaceAction.VIEW_MEMBERS,
        WorkspaceAction.VIEW_TAGS,
    }
)

_CONTENT_ACTIONS = frozenset(
    {
        WorkspaceAction.CREATE_TAG,
        WorkspaceAction.ASSIGN_TAG,
    }
)

_ADMIN_ACTIONS = frozenset(
    {
        WorkspaceAction.CREATE_WORKSPACE,
        WorkspaceAction.UPDATE_WORKSPACE,
        WorkspaceAction.DELETE_WORKSPACE,
        WorkspaceAction.ADD_MEMBER,
        WorkspaceAction.REMOVE_MEMBER,
    }
)

ROLE_PERMISSIONS: Mapping[WorkspaceRole, frozenset[WorkspaceAction]] = (
    MappingProxyType(
        {
            WorkspaceRole.ADMIN: _READ_ACTIONS | _CONTENT_ACTIONS | _ADMIN_ACTIONS,
            WorkspaceRole.MEMBER: _READ_ACTIONS | _CONTENT_ACTIONS,
            WorkspaceRole.VIEWER: _READ_ACTIONS,
        }
    )
)


def can_perform(role: WorkspaceRole | None, action: WorkspaceAction) -> bool:
    """Decide whether a workspace role may perform an action.

    Args:
        role: The actor's role in the target workspace, or None when the
            actor is not a member (or the target could not be resolved)
        action: The requested action

    Returns:
        True only if the role's row in ROLE_PERMISSIONS lists the action
    """
    if role is None:
        return False
    return action in ROLE_PERMISSIONS.get(role, frozenset())

