"""Top-level monitor configuration — bundles every input model."""

from pydantic import BaseModel, Field

from ssb_monitor.config.engine import EngineConfig, MetricsConfig
from ssb_monitor.config.inputs import EnvironmentalInputs, InputRanges
from ssb_monitor.config.model import DegradationModelConfig


class MonitorConfig(BaseModel):
    """Complete input bundle for one monitor instance."""

    model: DegradationModelConfig = Field(default_factory=DegradationModelConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)
    initial_inputs: EnvironmentalInputs = Field(default_factory=EnvironmentalInputs)
    ranges: InputRanges = Field(default_factory=InputRanges)
