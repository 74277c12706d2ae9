"""Domain exceptions for the workspaces bounded context.

These exceptions represent integrity errors raised by repositories and
services. Policy denials are never raised: services return False or None
for them so that callers cannot tell a denied request from one with
nothing to do.
"""


class DuplicateMembershipError(Exception):
    """Raised when a user already holds a membership in the workspace.

    At most one membership exists per (user, workspace) pair. Raised both
    for the explicit pre-check and when the database uniqueness constraint
    rejects a concurrent insert.
    """

    pass


class DuplicateTaskTagError(Exception):
    """Raised when a tag is already attached to the task."""

    pass


class UserNotFoundError(Exception):
    """Raised when an operation requires a user that does not exist.

    Only used where the user is a required entity (the creator of a new
    workspace). Lookups of optional targets return None instead.
    """

    pass


class WorkspaceCreationError(Exception):
    """Raised when creating a workspace and its admin membership fails.

    The transaction has been rolled back; no workspace without an admin
    is left behind. The underlying failure is chained as __cause__.
    """

    pass
