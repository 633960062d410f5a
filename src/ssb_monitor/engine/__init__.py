"""Engine — degradation model, per-tick state update, chart history."""

from ssb_monitor.engine.degradation import DegradationModel, StressFactors
from ssb_monitor.engine.metrics import compute_display_metrics
from ssb_monitor.engine.history import HistoryBuffer, HistoryView
from ssb_monitor.engine.simulation import SimulationEngine
from ssb_monitor.engine.driver import TickDriver

__all__ = [
    "DegradationModel",
    "StressFactors",
    "compute_display_metrics",
    "HistoryBuffer",
    "HistoryView",
    "SimulationEngine",
    "TickDriver",
]
