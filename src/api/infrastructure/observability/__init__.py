"""Probes that report infrastructure events as structured log entries."""

from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from infrastructure.observability.startup_probe import (
    DefaultStartupProbe,
    StartupProbe,
)
from shared_kernel.observability_context import ObservationContext

__all__ = [
    "ConnectionProbe",
    "DefaultConnectionProbe",
    "DefaultStartupProbe",
    "ObservationContext",
    "StartupProbe",
]
