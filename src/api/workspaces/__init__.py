"""Workspaces bounded context.

Owns workspace membership, the three-role authorization model and the
resolution of resources (projects, tasks, tags) to their owning workspace.
"""
