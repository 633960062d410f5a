"""Engine run-state and display constants."""

from pydantic import BaseModel, Field, model_validator


class EngineConfig(BaseModel):
    """State-of-health bookkeeping for one simulated cell."""

    initial_soh_pct: float = Field(default=100.0, gt=0, description="SoH of a fresh cell (%)")
    soh_floor_pct: float = Field(default=70.0, ge=0, description="SoH never drops below this (%)")
    damping_divisor: float = Field(
        default=10.0, gt=0,
        description="Per-tick SoH loss = rate / divisor; slows the demo to a watchable pace",
    )
    history_capacity: int = Field(default=30, ge=1, description="Samples kept for charting")
    cycle_label_prefix: str = Field(default="C", description="Prefix for chart x-axis labels")
    tick_interval_s: float = Field(default=0.8, gt=0, description="Driver period between ticks (s)")

    @model_validator(mode="after")
    def _floor_below_initial(self) -> "EngineConfig":
        if self.soh_floor_pct > self.initial_soh_pct:
            raise ValueError(
                f"soh_floor_pct ({self.soh_floor_pct}) cannot exceed initial_soh_pct ({self.initial_soh_pct})"
            )
        return self


class MetricsConfig(BaseModel):
    """Constants for the secondary health indicators shown next to SoH."""

    baseline_resistance_mohm: float = Field(default=50.0, gt=0, description="Internal resistance of a fresh cell (mΩ)")
    resistance_scale_pct: float = Field(default=100.0, gt=0, description="Rate that doubles resistance (%)")
    baseline_voltage_variance_v: float = Field(default=0.05, ge=0, description="Cell voltage spread of a fresh cell (V)")
    voltage_variance_scale_pct: float = Field(default=50.0, gt=0, description="Rate that doubles voltage spread (%)")
    projection_years: float = Field(default=3.0, gt=0, description="Horizon of the SoH projection (years)")
    cycles_per_year: float = Field(default=365.0, gt=0, description="Assumed cycles per year")
    projection_utilization: float = Field(
        default=0.8, ge=0, le=1.0,
        description="Fraction of nominal cycles actually run over the horizon",
    )
    projection_floor_pct: float = Field(default=70.0, ge=0, description="Projection never drops below this (%)")
