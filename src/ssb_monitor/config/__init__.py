"""Configuration models — every tunable of the monitor."""

from ssb_monitor.config.inputs import EnvironmentalInputs, InputRanges, SliderRange
from ssb_monitor.config.model import DegradationModelConfig
from ssb_monitor.config.engine import EngineConfig, MetricsConfig
from ssb_monitor.config.scenario import MonitorConfig

__all__ = [
    "EnvironmentalInputs",
    "InputRanges",
    "SliderRange",
    "DegradationModelConfig",
    "EngineConfig",
    "MetricsConfig",
    "MonitorConfig",
]
