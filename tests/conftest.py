"""Shared test fixtures — reference inputs and a ready-to-tick engine."""

from __future__ import annotations

import pytest

from ssb_monitor.config import (
    DegradationModelConfig,
    EngineConfig,
    EnvironmentalInputs,
    MetricsConfig,
)
from ssb_monitor.engine.degradation import DegradationModel
from ssb_monitor.engine.simulation import SimulationEngine


@pytest.fixture
def baseline_inputs() -> EnvironmentalInputs:
    """Reference conditions: every stress factor is exactly 1."""
    return EnvironmentalInputs(temperature_c=25.0, salt_ppm=1_000.0, depth_of_discharge_pct=0.0)


@pytest.fixture
def demo_inputs() -> EnvironmentalInputs:
    """Operator presets the dashboard opens with."""
    return EnvironmentalInputs(temperature_c=32.0, salt_ppm=1_350.0, depth_of_discharge_pct=75.0)


@pytest.fixture
def harsh_inputs() -> EnvironmentalInputs:
    """Far outside slider ranges; drives the rate into its 1.5 % cap."""
    return EnvironmentalInputs(temperature_c=500.0, salt_ppm=10_000.0, depth_of_discharge_pct=100.0)


@pytest.fixture
def model() -> DegradationModel:
    return DegradationModel(DegradationModelConfig())


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig(
        initial_soh_pct=100.0,
        soh_floor_pct=70.0,
        damping_divisor=10.0,
        history_capacity=30,
        cycle_label_prefix="C",
        tick_interval_s=0.8,
    )


@pytest.fixture
def engine(model: DegradationModel, engine_config: EngineConfig, demo_inputs: EnvironmentalInputs) -> SimulationEngine:
    """Stopped engine whose accessor always returns the demo presets."""
    return SimulationEngine(
        model=model,
        config=engine_config,
        metrics=MetricsConfig(),
        input_accessor=lambda: demo_inputs,
    )
