"""Observability probes for the Workspace aggregate.

Domain probes for Workspace following Domain Oriented Observability pattern.
Probes emit structured logs with domain-specific context for changes made
to workspace settings.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class WorkspaceProbe(Protocol):
    """Protocol for workspace aggregate observability probes."""

    def workspace_renamed(
        self,
        workspace_id: str,
        old_name: str,
        new_name: str,
    ) -> None:
        """Probe emitted when a workspace is renamed.

        Args:
            workspace_id: The workspace ID
            old_name: The previous name
            new_name: The new name
        """
        ...

    def description_changed(self, workspace_id: str) -> None:
        """Probe emitted when a workspace description changes.

        Args:
            workspace_id: The workspace ID
        """
        ...


class DefaultWorkspaceProbe:
    """Default implementation of WorkspaceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._logger = logger or structlog.get_logger()

    def workspace_renamed(
        self,
        workspace_id: str,
        old_name: str,
        new_name: str,
    ) -> None:
        """Log workspace rename."""
        self._logger.info(
            "workspace_renamed",
            workspace_id=workspace_id,
            old_name=old_name,
            new_name=new_name,
        )

    def description_changed(self, workspace_id: str) -> None:
        """Log workspace description change."""
        self._logger.info(
            "workspace_description_changed",
            workspace_id=workspace_id,
        )
