"""Degradation model coefficients."""

from pydantic import BaseModel, Field


class DegradationModelConfig(BaseModel):
    """Empirical per-cycle capacity-loss formula.

    rate = base × (1 + k_T·(T − T_ref)) × (1 + k_S·(S − S_ref))
               × (1 + k_D·DoD/100) × (1 + k_N·cycle),  capped at max_rate
    """

    base_rate_pct: float = Field(default=0.028, description="Capacity loss per cycle at reference conditions (%)")
    reference_temperature_c: float = Field(default=25.0, description="Temperature with no thermal stress (°C)")
    temperature_coeff: float = Field(default=0.02, description="Fractional rate increase per °C above reference")
    reference_salt_ppm: float = Field(default=1_000.0, description="Salt level with no corrosion stress (ppm)")
    salt_coeff: float = Field(default=0.0005, description="Fractional rate increase per ppm above reference")
    dod_coeff: float = Field(default=0.015, description="Fractional rate increase at 100% depth of discharge")
    cycle_coeff: float = Field(default=0.0001, description="Fractional rate increase per elapsed cycle")
    max_rate_pct: float = Field(default=1.5, description="Upper cap on the per-cycle rate (%)")
