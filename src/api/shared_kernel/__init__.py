"""Shared Kernel module.

Foundational components explicitly shared across bounded contexts. Changes
here affect every context and should be carefully coordinated.
"""

from shared_kernel.observability_context import ObservationContext

__all__ = ["ObservationContext"]
