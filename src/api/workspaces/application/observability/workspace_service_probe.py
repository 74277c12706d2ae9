"""Protocol for workspace application service observability.

Defines the interface for domain probes that capture application-level
domain events for workspace lifecycle and membership operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class WorkspaceServiceProbe(Protocol):
    """Domain probe for workspace application service operations."""

    def workspace_created(
        self,
        workspace_id: str,
        name: str,
        creator_id: str,
    ) -> None:
        """Record workspace creation (workspace and admin membership committed)."""
        ...

    def workspace_creation_failed(
        self,
        creator_id: str,
        name: str,
        error: str,
    ) -> None:
        """Record failed workspace creation (transaction rolled back)."""
        ...

    def workspace_updated(
        self,
        workspace_id: str,
        acting_user_id: str,
        changed: bool,
    ) -> None:
        """Record a workspace settings update."""
        ...

    def workspace_deleted(
        self,
        workspace_id: str,
        acting_user_id: str,
    ) -> None:
        """Record workspace deletion."""
        ...

    def workspace_not_found(
        self,
        workspace_id: str,
    ) -> None:
        """Record workspace not found."""
        ...

    def workspaces_listed(
        self,
        user_id: str,
        count: int,
    ) -> None:
        """Record workspaces listed."""
        ...

    def workspace_member_added(
        self,
        workspace_id: str,
        member_id: str,
        role: str,
        acting_user_id: str,
    ) -> None:
        """Record workspace member addition."""
        ...

    def workspace_member_removed(
        self,
        workspace_id: str,
        member_id: str,
        acting_user_id: str,
    ) -> None:
        """Record workspace member removal."""
        ...

    def membership_change_rejected(
        self,
        workspace_id: str,
        acting_user_id: str,
        operation: str,
        reason: str,
    ) -> None:
        """Record a permitted membership change that could not be applied."""
        ...

    def notification_failed(
        self,
        target_user_id: str,
        event_type: str,
        error: str,
    ) -> None:
        """Record a notification hand-off failure (membership change is kept)."""
        ...

    def with_context(self, context: ObservationContext) -> WorkspaceServiceProbe:
        """Return a new probe with additional context."""
        ...


class DefaultWorkspaceServiceProbe:
    """Default implementation of WorkspaceServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Get context as kwargs dict, excluding specified keys.

        Args:
            exclude: Set of keys to exclude from context (avoids parameter collision)

        Returns:
            Context dict with excluded keys filtered out
        """
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultWorkspaceServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultWorkspaceServiceProbe(logger=self._logger, context=context)

    def workspace_created(
        self,
        workspace_id: str,
        name: str,
        creator_id: str,
    ) -> None:
        """Record workspace creation."""
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "name", "creator_id"}
        )
        self._logger.info(
            "workspace_created",
            workspace_id=workspace_id,
            name=name,
            creator_id=creator_id,
            **context_kwargs,
        )

    def workspace_creation_failed(
        self,
        creator_id: str,
        name: str,
        error: str,
    ) -> None:
        """Record failed workspace creation."""
        context_kwargs = self._get_context_kwargs(
            exclude={"creator_id", "name", "error"}
        )
        self._logger.error(
            "workspace_creation_failed",
            creator_id=creator_id,
            name=name,
            error=error,
            **context_kwargs,
        )

    def workspace_updated(
        self,
        workspace_id: str,
        acting_user_id: str,
        changed: bool,
    ) -> None:
        """Record a workspace settings update."""
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "acting_user_id", "changed"}
        )
        self._logger.info(
            "workspace_updated",
            workspace_id=workspace_id,
            acting_user_id=acting_user_id,
            changed=changed,
            **context_kwargs,
        )

    def workspace_deleted(
        self,
        workspace_id: str,
        acting_user_id: str,
    ) -> None:
        """Record workspace deletion."""
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "acting_user_id"}
        )
        self._logger.info(
            "workspace_deleted",
            workspace_id=workspace_id,
            acting_user_id=acting_user_id,
            **context_kwargs,
        )

    def workspace_not_found(
        self,
        workspace_id: str,
    ) -> None:
        """Record workspace not found."""
        context_kwargs = self._get_context_kwargs(exclude={"workspace_id"})
        self._logger.debug(
            "workspace_not_found",
            workspace_id=workspace_id,
            **context_kwargs,
        )

    def workspaces_listed(
        self,
        user_id: str,
        count: int,
    ) -> None:
        """Record workspaces listed."""
        context_kwargs = self._get_context_kwargs(exclude={"user_id", "count"})
        self._logger.debug(
            "workspaces_listed",
            user_id=user_id,
            count=count,
            **context_kwargs,
        )

    def workspace_member_added(
        self,
        workspace_id: str,
        member_id: str,
        role: str,
        acting_user_id: str,
    ) -> None:
        """Record workspace member addition."""
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "member_id", "role", "acting_user_id"}
        )
        self._logger.info(
            "workspace_member_added",
            workspace_id=workspace_id,
            member_id=member_id,
            role=role,
            acting_user_id=acting_user_id,
            **context_kwargs,
        )

    def workspace_member_removed(
        self,
        workspace_id: str,
        member_id: str,
        acting_user_id: str,
    ) -> None:
        """Record workspace member removal."""
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "member_id", "acting_user_id"}
        )
        self._logger.info(
            "workspace_member_removed",
            workspace_id=workspace_id,
            member_id=member_id,
            acting_user_id=acting_user_id,
            **context_kwargs,
        )

    def membership_change_rejected(
        self,
        workspace_id: str,
        acting_user_id: str,
        operation: str,
        reason: str,
    ) -> None:
        """Record a membership change that could not be applied."""
        context_kwargs = self._get_context_kwargs(
            exclude={"workspace_id", "acting_user_id", "operation", "reason"}
        )
        self._logger.info(
            "membership_change_rejected",
            workspace_id=workspace_id,
            acting_user_id=acting_user_id,
            operation=operation,
            reason=reason,
            **context_kwargs,
        )

    def notification_failed(
        self,
        target_user_id: str,
        event_type: str,
        error: str,
    ) -> None:
        """Record a notification hand-off failure."""
        context_kwargs = self._get_context_kwargs(
            exclude={"target_user_id", "event_type", "error"}
        )
        self._logger.error(
            "notification_failed",
            target_user_id=target_user_id,
            event_type=event_type,
            error=error,
            **context_kwargs,
        )
