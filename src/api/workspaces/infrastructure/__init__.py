"""Infrastructure layer for the workspaces bounded context."""
