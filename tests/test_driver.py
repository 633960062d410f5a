"""Tests for engine/driver.py — cancellable periodic ticker.

Intervals are tiny and every wait has a generous timeout, so these stay
fast without depending on scheduler precision.
"""

from __future__ import annotations

import math
import threading
import time

import pytest
from pydantic import ValidationError

from ssb_monitor.config import EngineConfig, EnvironmentalInputs
from ssb_monitor.engine.driver import TickDriver
from ssb_monitor.engine.simulation import SimulationEngine
from ssb_monitor.models.results import TickResult


def _wait_until(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


@pytest.fixture
def counted_engine(demo_inputs: EnvironmentalInputs):
    """Engine plus an event that fires once three ticks have landed."""
    ticks: list[TickResult] = []
    three = threading.Event()

    def sink(result: TickResult) -> None:
        ticks.append(result)
        if len(ticks) >= 3:
            three.set()

    engine = SimulationEngine(input_accessor=lambda: demo_inputs, sink=sink)
    return engine, ticks, three


class TestTickDriver:

    def test_interval_defaults_to_engine_config(self, demo_inputs: EnvironmentalInputs):
        engine = SimulationEngine(config=EngineConfig(tick_interval_s=0.8), input_accessor=lambda: demo_inputs)
        assert TickDriver(engine).interval_s == 0.8

    def test_invalid_interval_rejected(self, engine: SimulationEngine):
        with pytest.raises(ValueError):
            TickDriver(engine, interval_s=0)

    def test_ticks_while_running(self, counted_engine):
        engine, ticks, three = counted_engine
        driver = TickDriver(engine, interval_s=0.01)
        assert driver.start() is True
        try:
            assert three.wait(timeout=5.0)
            assert engine.is_running
            assert driver.is_running
        finally:
            driver.stop(timeout=5.0)
        assert [t.state.cycle_count for t in ticks[:3]] == [1, 2, 3]

    def test_stop_halts_ticks_and_keeps_state(self, counted_engine):
        engine, ticks, three = counted_engine
        driver = TickDriver(engine, interval_s=0.01)
        driver.start()
        assert three.wait(timeout=5.0)
        assert driver.stop(timeout=5.0) is True

        frozen = engine.state
        time.sleep(0.05)
        assert engine.state == frozen
        assert frozen.running is False
        assert frozen.cycle_count >= 3
        assert not driver.is_running

    def test_start_twice_is_noop(self, counted_engine):
        engine, _, _ = counted_engine
        driver = TickDriver(engine, interval_s=0.01)
        driver.start()
        try:
            assert driver.start() is False
        finally:
            driver.stop(timeout=5.0)

    def test_stop_when_idle_is_noop(self, engine: SimulationEngine):
        assert TickDriver(engine, interval_s=0.01).stop() is False

    def test_restart_resumes_cycle_count(self, counted_engine):
        engine, ticks, three = counted_engine
        driver = TickDriver(engine, interval_s=0.01)
        driver.start()
        assert three.wait(timeout=5.0)
        driver.stop(timeout=5.0)
        paused_at = engine.state.cycle_count

        driver.start()
        try:
            assert _wait_until(lambda: engine.state.cycle_count > paused_at)
        finally:
            driver.stop(timeout=5.0)
        assert ticks[paused_at].state.cycle_count == paused_at + 1

    def test_bad_input_stops_driver_and_surfaces_error(self):
        engine = SimulationEngine(
            input_accessor=lambda: {"temperature_c": math.nan, "salt_ppm": 1000, "depth_of_discharge_pct": 50},
        )
        driver = TickDriver(engine, interval_s=0.01)
        driver.start()
        assert _wait_until(lambda: not driver.is_running)
        assert isinstance(driver.last_error, ValidationError)
        assert engine.is_running is False
        assert engine.state.cycle_count == 0
        driver.stop(timeout=5.0)


class TestEngineStoppedDirectly:
    """A UI may stop the engine without going through the driver."""

    def test_worker_exits_and_driver_restarts(self, counted_engine):
        engine, ticks, three = counted_engine
        driver = TickDriver(engine, interval_s=0.01)
        driver.start()
        assert three.wait(timeout=5.0)

        engine.stop()
        assert not driver.is_running
        old_thread = driver._thread
        assert old_thread is not None
        old_thread.join(timeout=5.0)
        assert not old_thread.is_alive()

        paused_at = engine.state.cycle_count
        assert driver.start() is True
        try:
            assert _wait_until(lambda: engine.state.cycle_count > paused_at)
            assert driver.is_running
        finally:
            driver.stop(timeout=5.0)


class TestStopDuringTick:

    def test_stop_while_tick_in_flight_discards_it(self, demo_inputs: EnvironmentalInputs):
        entered = threading.Event()
        release = threading.Event()

        def slow_accessor() -> EnvironmentalInputs:
            entered.set()
            release.wait(timeout=5.0)
            return demo_inputs

        engine = SimulationEngine(input_accessor=slow_accessor)
        driver = TickDriver(engine, interval_s=0.01)
        driver.start()
        assert entered.wait(timeout=5.0)

        releaser = threading.Timer(0.05, release.set)
        releaser.start()
        assert driver.stop(timeout=5.0) is True
        releaser.join(timeout=5.0)

        assert engine.state.cycle_count == 0
        assert engine.state.running is False
        assert len(engine.history) == 0
        assert driver.last_error is None
