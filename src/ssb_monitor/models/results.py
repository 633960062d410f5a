"""Result types — the contract between engine, history and display shells.

Everything here is immutable. The engine keeps its own mutable run state
and hands out these snapshots; shells read them and never write back.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


# ═══════════════════════════════════════════════════════════════════════════
# Run state
# ═══════════════════════════════════════════════════════════════════════════

class SimulationState(BaseModel):
    """Point-in-time view of the engine's run state."""

    model_config = ConfigDict(frozen=True)

    state_of_health_pct: float
    """Remaining usable capacity (% of original). Starts at 100, floored at 70."""

    cycle_count: int
    """Completed cycles. Monotonic; survives stop/start."""

    running: bool
    """True while the engine accepts ticks."""


# ═══════════════════════════════════════════════════════════════════════════
# Per-tick outputs
# ═══════════════════════════════════════════════════════════════════════════

class DisplayMetrics(BaseModel):
    """Secondary indicators derived from one tick's degradation rate.

      internal_resistance = round(50 × (1 + rate/100))        mΩ
      voltage_variance    = 0.05 × (1 + rate/50)              V, 3 dp
      projected_soh_3y    = max(70, 100 − rate × 365 × 3 × 0.8)
    """

    model_config = ConfigDict(frozen=True)

    degradation_rate_pct: float
    internal_resistance_mohm: int
    voltage_variance_v: float
    projected_soh_3y_pct: float


class DegradationSample(BaseModel):
    """One row of the charted time series."""

    model_config = ConfigDict(frozen=True)

    cycle_label: str
    """x-axis label, e.g. ``"C12"``."""

    cycle: int
    state_of_health_pct: float
    temperature_c: float
    salt_ppm: float
    depth_of_discharge_pct: float
    degradation_rate_pct: float


SAMPLE_SERIES = (
    "state_of_health_pct",
    "temperature_c",
    "salt_ppm",
    "depth_of_discharge_pct",
    "degradation_rate_pct",
)
"""Numeric columns of :class:`DegradationSample` that can be charted."""


@dataclass(frozen=True)
class TickResult:
    """Immutable output of one engine tick.

    Display sinks receive this once per cycle; it carries everything a
    shell needs to refresh its cards and charts.
    """

    state: SimulationState
    """Run state after the tick."""

    degradation_rate_pct: float
    """Capacity loss attributed to this cycle (%), before damping."""

    metrics: DisplayMetrics
    """Derived indicators for this cycle."""

    sample: DegradationSample
    """Row appended to history."""

    evicted: DegradationSample | None = None
    """Oldest row pushed out of history by this tick, if any."""

    history: tuple[DegradationSample, ...] = ()
    """Chart history after this tick, oldest first."""
