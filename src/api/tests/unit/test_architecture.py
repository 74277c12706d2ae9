"""Architecture tests using pytest-archon.

These tests enforce DDD architectural boundaries between layers
within the Workspaces bounded context.
"""

from pytest_archon import archrule


class TestWorkspacesDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_infrastructure(self):
        """Domain layer should not depend on infrastructure.

        The domain layer contains pure business logic and should not
        know about database sessions, SQL, or ORM models.
        """
        (
            archrule("domain_no_infrastructure")
            .match("workspaces.domain*")
            .should_not_import("workspaces.infrastructure*", "infrastructure*")
            .check("workspaces")
        )

    def test_domain_does_not_import_application(self):
        """Domain objects should be usable without application services."""
        (
            archrule("domain_no_application")
            .match("workspaces.domain*")
            .should_not_import("workspaces.application*")
            .check("workspaces")
        )

    def test_domain_does_not_import_sqlalchemy(self):
        """Domain objects should be persistence-agnostic."""
        (
            archrule("domain_no_sqlalchemy")
            .match("workspaces.domain*")
            .should_not_import("sqlalchemy*")
            .check("workspaces")
        )


class TestWorkspacesPortsLayerBoundaries:
    """Tests that the ports layer has no forbidden dependencies."""

    def test_ports_does_not_import_infrastructure(self):
        """Ports define interfaces; they should not know the implementations."""
        (
            archrule("ports_no_infrastructure")
            .match("workspaces.ports*")
            .should_not_import("workspaces.infrastructure*")
            .check("workspaces")
        )

    def test_ports_does_not_import_application(self):
        """Ports are interfaces for the application layer, not the reverse."""
        (
            archrule("ports_no_application")
            .match("workspaces.ports*")
            .should_not_import("workspaces.application*")
            .check("workspaces")
        )


class TestWorkspacesApplicationLayerBoundaries:
    """Tests that application services depend on ports, not adapters."""

    def test_application_does_not_import_infrastructure(self):
        (
            archrule("application_no_infrastructure")
            .match("workspaces.application*")
            .should_not_import("workspaces.infrastructure*")
            .check("workspaces")
        )


class TestSharedKernelBoundaries:
    def test_shared_kernel_does_not_import_workspaces(self):
        """The shared kernel must not depend on any bounded context."""
        (
            archrule("shared_kernel_no_contexts")
            .match("shared_kernel*")
            .should_not_import("workspaces*")
            .check("shared_kernel")
        )
