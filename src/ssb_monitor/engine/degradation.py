"""Per-cycle capacity-loss model for a solid-state cell.

Four multiplicative stress factors scale a baseline loss of 0.028 % per
cycle:

  temp_factor  = 1 + 0.02   × (T − 25 °C)
  salt_factor  = 1 + 0.0005 × (salt − 1000 ppm)
  dod_factor   = 1 + 0.015  × (DoD / 100)
  cycle_factor = 1 + 0.0001 × cycle
  rate         = min(0.028 × Π factors, 1.5)

The model is illustrative, not physically derived. Cold or very clean
conditions can push a factor, and hence the rate, to zero or below; that
is left as is.
"""

from __future__ import annotations

from dataclasses import dataclass

from ssb_monitor.config.inputs import EnvironmentalInputs
from ssb_monitor.config.model import DegradationModelConfig


@dataclass(frozen=True)
class StressFactors:
    """Individual multipliers behind one prediction."""

    temperature: float
    salt: float
    depth_of_discharge: float
    cycle: float

    @property
    def combined(self) -> float:
        return self.temperature * self.salt * self.depth_of_discharge * self.cycle


class DegradationModel:
    """Stateless empirical degradation model.

    Usage::

        model = DegradationModel()
        rate = model.predict(EnvironmentalInputs(temperature_c=32), cycle_count=0)

    Parameters
    ----------
    config : DegradationModelConfig | None
        Coefficients; defaults reproduce the reference formula.
    """

    def __init__(self, config: DegradationModelConfig | None = None) -> None:
        self._config = config or DegradationModelConfig()

    @property
    def config(self) -> DegradationModelConfig:
        return self._config

    def factors(self, inputs: EnvironmentalInputs, cycle_count: int) -> StressFactors:
        """Break a prediction down into its stress factors."""
        if cycle_count < 0:
            raise ValueError(f"cycle_count must be >= 0, got {cycle_count}")
        c = self._config
        return StressFactors(
            temperature=1 + c.temperature_coeff * (inputs.temperature_c - c.reference_temperature_c),
            salt=1 + c.salt_coeff * (inputs.salt_ppm - c.reference_salt_ppm),
            depth_of_discharge=1 + c.dod_coeff * (inputs.depth_of_discharge_pct / 100.0),
            cycle=1 + c.cycle_coeff * cycle_count,
        )

    def predict(self, inputs: EnvironmentalInputs, cycle_count: int) -> float:
        """Capacity loss (%) attributable to the cycle numbered *cycle_count*.

        Returns
        -------
        float
            Rate capped at ``max_rate_pct``; no lower bound is applied.
        """
        rate = self._config.base_rate_pct * self.factors(inputs, cycle_count).combined
        return min(rate, self._config.max_rate_pct)
