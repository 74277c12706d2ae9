"""Ports (interfaces) for the workspaces bounded context."""
