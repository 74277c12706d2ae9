"""Application layer for the workspaces bounded context."""
