"""Result models — simulation output contracts."""

from ssb_monitor.models.results import (
    SAMPLE_SERIES,
    DegradationSample,
    DisplayMetrics,
    SimulationState,
    TickResult,
)

__all__ = [
    "SAMPLE_SERIES",
    "DegradationSample",
    "DisplayMetrics",
    "SimulationState",
    "TickResult",
]
