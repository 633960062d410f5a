"""Display metrics — secondary health indicators for one tick.

Pure arithmetic: degradation rate → DisplayMetrics. Nothing is stored;
the engine recomputes these every tick.
"""

from __future__ import annotations

import math

from ssb_monitor.config.engine import MetricsConfig
from ssb_monitor.models.results import DisplayMetrics


def _round_half_up(value: float) -> int:
    # 50.5 mΩ reads as 51, not the banker's 50.
    return math.floor(value + 0.5)


def compute_display_metrics(
    degradation_rate_pct: float,
    config: MetricsConfig | None = None,
) -> DisplayMetrics:
    """Derive resistance, voltage spread and the multi-year SoH projection."""
    cfg = config or MetricsConfig()

    # ── Internal resistance grows linearly with the per-cycle rate ─────
    resistance = cfg.baseline_resistance_mohm * (1 + degradation_rate_pct / cfg.resistance_scale_pct)

    # ── Voltage variance between cells ─────────────────────────────────
    variance = cfg.baseline_voltage_variance_v * (1 + degradation_rate_pct / cfg.voltage_variance_scale_pct)

    # ── Projection: today's rate held for the whole horizon ────────────
    horizon_cycles = cfg.cycles_per_year * cfg.projection_years * cfg.projection_utilization
    projected = max(cfg.projection_floor_pct, 100.0 - degradation_rate_pct * horizon_cycles)

    return DisplayMetrics(
        degradation_rate_pct=degradation_rate_pct,
        internal_resistance_mohm=_round_half_up(resistance),
        voltage_variance_v=round(variance, 3),
        projected_soh_3y_pct=projected,
    )
