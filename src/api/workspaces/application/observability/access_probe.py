"""Protocol for workspace access decision observability.

Authorization failures are returned to callers as plain False/None results.
This probe is the only place the reason for a denial is recorded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class WorkspaceAccessProbe(Protocol):
    """Domain probe for access decisions."""

    def access_granted(
        self,
        actor_id: str,
        workspace_id: str,
        action: str,
        role: str,
    ) -> None:
        """Record an allowed action."""
        ...

    def access_denied(
        self,
        actor_id: str,
        workspace_id: str | None,
        action: str,
        reason: str,
    ) -> None:
        """Record a refused action and why it was refused."""
        ...

    def with_context(self, context: ObservationContext) -> WorkspaceAccessProbe:
        """Return a new probe with additional context."""
        ...


class DefaultWorkspaceAccessProbe:
    """Default implementation of WorkspaceAccessProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Get context as kwargs dict, excluding specified keys."""
        if self._context is None:
            return {}

        context_dict = self._context.as_dict()
        if exclude:
            return {k: v for k, v in context_dict.items() if k not in exclude}
        return context_dict

    def with_context(self, context: ObservationContext) -> DefaultWorkspaceAccessProbe:
        """Create a new probe with observation context bound."""
        return DefaultWorkspaceAccessProbe(logger=self._logger, context=context)

    def access_granted(
        self,
        actor_id: str,
        workspace_id: str,
        action: str,
        role: str,
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"actor_id", "workspace_id", "action", "role"}
        )
        self._logger.debug(
            "workspace_access_granted",
            actor_id=actor_id,
            workspace_id=workspace_id,
            action=action,
            role=role,
            **context_kwargs,
        )

    def access_denied(
        self,
        actor_id: str,
        workspace_id: str | None,
        action: str,
        reason: str,
    ) -> None:
        context_kwargs = self._get_context_kwargs(
            exclude={"actor_id", "workspace_id", "action", "reason"}
        )
        self._logger.warning(
            "workspace_access_denied",
            actor_id=actor_id,
            workspace_id=workspace_id,
            action=action,
            reason=reason,
            **context_kwargs,
        )
