"""Domain layer for the workspaces bounded context."""
