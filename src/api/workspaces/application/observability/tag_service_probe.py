"""Protocol for tag service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TagServiceProbe(Protocol):
    """Domain probe for tag creation and assignment."""

    def tag_created(
        self,
        tag_id: str,
        workspace_id: str,
        acting_user_id: str,
    ) -> None:
        """Record tag creation."""
        ...

    def tag_assigned(
        self,
        task_id: str,
        tag_id: str,
        acting_user_id: str,
    ) -> None:
        """Record a tag attached to a task."""
        ...

    def tag_assignment_rejected(
        self,
        task_id: str,
        tag_id: str,
        acting_user_id: str,
        reason: str,
    ) -> None:
        """Record a permitted assignment that could not be applied."""
        ...

    def with_context(self, context: ObservationContext) -> TagServiceProbe:
        """Return a new probe with additional context."""
        ...


class DefaultTagServiceProbe:
    """Default implementation of TagServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self, exclude: set[str]) -> dict[str, Any]:
        if self._context is None:
            return {}
        return {k: v for k, v in self._context.as_dict().items() if k not in exclude}

    def with_context(self, context: ObservationContext) -> DefaultTagServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTagServiceProbe(logger=self._logger, context=context)

    def tag_created(
        self,
        tag_id: str,
        workspace_id: str,
        acting_user_id: str,
    ) -> None:
        self._logger.info(
            "tag_created",
            tag_id=tag_id,
            workspace_id=workspace_id,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs({"tag_id", "workspace_id", "acting_user_id"}),
        )

    def tag_assigned(
        self,
        task_id: str,
        tag_id: str,
        acting_user_id: str,
    ) -> None:
        self._logger.info(
            "tag_assigned",
            task_id=task_id,
            tag_id=tag_id,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs({"task_id", "tag_id", "acting_user_id"}),
        )

    def tag_assignment_rejected(
        self,
        task_id: str,
        tag_id: str,
        acting_user_id: str,
        reason: str,
    ) -> None:
        self._logger.info(
            "tag_assignment_rejected",
            task_id=task_id,
            tag_id=tag_id,
            acting_user_id=acting_user_id,
            reason=reason,
            **self._get_context_kwargs(
                {"task_id", "tag_id", "acting_user_id", "reason"}
            ),
        )
