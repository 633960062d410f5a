"""Environmental inputs — the operator-controlled stress conditions."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EnvironmentalInputs(BaseModel):
    """One immutable snapshot of the cell's environment, taken once per tick.

    Any finite value is accepted. NaN and ±inf are rejected so they can
    never reach the state-of-health arithmetic.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, revalidate_instances="always")

    temperature_c: float = Field(default=32.0, description="Cell temperature (°C)")
    salt_ppm: float = Field(default=1_350.0, description="Ambient salt concentration (ppm)")
    depth_of_discharge_pct: float = Field(
        default=75.0,
        description="Depth of discharge per cycle (%); 0–100 by convention, not enforced",
    )


class SliderRange(BaseModel):
    """Bounds and step for one UI control."""

    min_value: float
    max_value: float
    step: float = Field(default=1.0, gt=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "SliderRange":
        if self.min_value > self.max_value:
            raise ValueError(f"min_value {self.min_value} exceeds max_value {self.max_value}")
        return self

    def clamp(self, value: float) -> float:
        """Pin *value* into [min_value, max_value]."""
        return min(max(value, self.min_value), self.max_value)


class InputRanges(BaseModel):
    """Slider ranges offered by display shells.

    The engine never consults these; they only bound what a UI lets the
    operator pick.
    """

    temperature_c: SliderRange = Field(
        default_factory=lambda: SliderRange(min_value=0.0, max_value=60.0, step=0.5),
    )
    salt_ppm: SliderRange = Field(
        default_factory=lambda: SliderRange(min_value=0.0, max_value=3_000.0, step=10.0),
    )
    depth_of_discharge_pct: SliderRange = Field(
        default_factory=lambda: SliderRange(min_value=0.0, max_value=100.0, step=1.0),
    )

    def clamp(self, inputs: EnvironmentalInputs) -> EnvironmentalInputs:
        """Return a copy of *inputs* with every field pinned to its slider range."""
        return EnvironmentalInputs(
            temperature_c=self.temperature_c.clamp(inputs.temperature_c),
            salt_ppm=self.salt_ppm.clamp(inputs.salt_ppm),
            depth_of_discharge_pct=self.depth_of_discharge_pct.clamp(inputs.depth_of_discharge_pct),
        )
