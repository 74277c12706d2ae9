"""Domain probes for workspaces repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events raised while persisting memberships, workspaces
and tags.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MembershipRepositoryProbe(Protocol):
    """Domain probe for membership store operations."""

    def membership_added(self, workspace_id: str, user_id: str, role: str) -> None:
        """Record that a membership row was inserted."""
        ...

    def membership_removed(self, workspace_id: str, user_id: str) -> None:
        """Record that a membership row was deleted."""
        ...

    def duplicate_membership(self, workspace_id: str, user_id: str) -> None:
        """Record that an insert hit the (user, workspace) uniqueness constraint."""
        ...

    def with_context(self, context: ObservationContext) -> MembershipRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class WorkspaceRepositoryProbe(Protocol):
    """Domain probe for workspace repository operations."""

    def workspace_saved(self, workspace_id: str) -> None:
        """Record that a workspace was saved."""
        ...

    def workspace_not_found(self, workspace_id: str) -> None:
        """Record that a workspace was not found."""
        ...

    def workspace_deleted(self, workspace_id: str) -> None:
        """Record that a workspace row was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> WorkspaceRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class TagRepositoryProbe(Protocol):
    """Domain probe for tag repository operations."""

    def tag_saved(self, tag_id: str, workspace_id: str) -> None:
        """Record that a tag was saved."""
        ...

    def tag_assigned(self, task_id: str, tag_id: str) -> None:
        """Record that a tag was attached to a task."""
        ...

    def duplicate_task_tag(self, task_id: str, tag_id: str) -> None:
        """Record that a task-tag edge already existed."""
        ...

    def with_context(self, context: ObservationContext) -> TagRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class _ContextualProbe:
    """Shared logger and context handling for the default probes."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()


class DefaultMembershipRepositoryProbe(_ContextualProbe):
    """Default implementation of MembershipRepositoryProbe using structlog."""

    def with_context(
        self, context: ObservationContext
    ) -> DefaultMembershipRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultMembershipRepositoryProbe(logger=self._logger, context=context)

    def membership_added(self, workspace_id: str, user_id: str, role: str) -> None:
        self._logger.debug(
            "membership_added",
            **{
                **self._get_context_kwargs(),
                "workspace_id": workspace_id,
                "user_id": user_id,
                "role": role,
            },
        )

    def membership_removed(self, workspace_id: str, user_id: str) -> None:
        self._logger.debug(
            "membership_removed",
            **{
                **self._get_context_kwargs(),
                "workspace_id": workspace_id,
                "user_id": user_id,
            },
        )

    def duplicate_membership(self, workspace_id: str, user_id: str) -> None:
        self._logger.warning(
            "duplicate_membership",
            **{
                **self._get_context_kwargs(),
                "workspace_id": workspace_id,
                "user_id": user_id,
            },
        )


class DefaultWorkspaceRepositoryProbe(_ContextualProbe):
    """Default implementation of WorkspaceRepositoryProbe using structlog."""

    def with_context(
        self, context: ObservationContext
    ) -> DefaultWorkspaceRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultWorkspaceRepositoryProbe(logger=self._logger, context=context)

    def workspace_saved(self, workspace_id: str) -> None:
        self._logger.debug(
            "workspace_saved",
            **{**self._get_context_kwargs(), "workspace_id": workspace_id},
        )

    def workspace_not_found(self, workspace_id: str) -> None:
        self._logger.debug(
            "workspace_not_found",
            **{**self._get_context_kwargs(), "workspace_id": workspace_id},
        )

    def workspace_deleted(self, workspace_id: str) -> None:
        self._logger.debug(
            "workspace_deleted",
            **{**self._get_context_kwargs(), "workspace_id": workspace_id},
        )


class DefaultTagRepositoryProbe(_ContextualProbe):
    """Default implementation of TagRepositoryProbe using structlog."""

    def with_context(self, context: ObservationContext) -> DefaultTagRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTagRepositoryProbe(logger=self._logger, context=context)

    def tag_saved(self, tag_id: str, workspace_id: str) -> None:
        self._logger.debug(
            "tag_saved",
            **{
                **self._get_context_kwargs(),
                "tag_id": tag_id,
                "workspace_id": workspace_id,
            },
        )

    def tag_assigned(self, task_id: str, tag_id: str) -> None:
        self._logger.debug(
            "tag_assigned",
            **{**self._get_context_kwargs(), "task_id": task_id, "tag_id": tag_id},
        )

    def duplicate_task_tag(self, task_id: str, tag_id: str) -> None:
        self._logger.warning(
            "duplicate_task_tag",
            **{**self._get_context_kwargs(), "task_id": task_id, "tag_id": tag_id},
        )
