"""Domain probes for shared infrastructure.

Infrastructure code (engine lifecycle) reports through probes rather than
calling the logger directly, like the bounded contexts do.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from shared_kernel.observability_context import ObservationContext

__all__ = [
    "ConnectionProbe",
    "DefaultConnectionProbe",
    "ObservationContext",
]
