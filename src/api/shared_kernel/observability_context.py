"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so that probe output from the services and
    repositories handling one request can be correlated.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        actor_id: Identifier of the user performing the operation.
        workspace_id: Workspace the operation targets (if known).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", actor_id="01J...")
        probe = DefaultWorkspaceServiceProbe().with_context(context)
    """

    request_id: str | None = None
    actor_id: str | None = None
    workspace_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.actor_id is not None:
            result["actor_id"] = self.actor_id
        if self.workspace_id is not None:
            result["workspace_id"] = self.workspace_id
        result.update(self.extra)
        return result

    def with_workspace(self, workspace_id: str) -> ObservationContext:
        """Create a new context with the workspace id set."""
        return ObservationContext(
            request_id=self.request_id,
            actor_id=self.actor_id,
            workspace_id=workspace_id,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            actor_id=self.actor_id,
            workspace_id=self.workspace_id,
            extra={**self.extra, **kwargs},
        )
