"""Public API surface for dsb_common."""

from dsb_common.errors import (
    BenchmarkInterrupted,
    ConfigurationError,
    DSBError,
    InsufficientSpaceError,
    MeasurementFailure,
    ResultPersistenceError,
    SpawnError,
)
from dsb_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "BenchmarkInterrupted",
    "ConfigurationError",
    "DSBError",
    "InsufficientSpaceError",
    "MeasurementFailure",
    "ResultPersistenceError",
    "SpawnError",
]
