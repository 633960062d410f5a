"""Simulation engine — run state, tick loop body, history feed.

Per tick (while running):
  1. rate      = model.predict(inputs, cycle_count)
  2. soh       = max(floor, soh − rate / damping_divisor)
  3. cycle    += 1
  4. metrics   = compute_display_metrics(rate)
  5. history  ← sample labelled "C<cycle>" (oldest evicted beyond capacity)

Two states, Stopped (initial) and Running. Transitions requested from the
wrong state are silent no-ops: UI shells may double-click or race a timer,
and neither should disturb the run.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from ssb_monitor.config.engine import EngineConfig, MetricsConfig
from ssb_monitor.config.inputs import EnvironmentalInputs
from ssb_monitor.config.scenario import MonitorConfig
from ssb_monitor.engine.degradation import DegradationModel
from ssb_monitor.engine.history import HistoryBuffer, HistoryView
from ssb_monitor.engine.metrics import compute_display_metrics
from ssb_monitor.models.results import DegradationSample, SimulationState, TickResult

logger = logging.getLogger(__name__)

InputAccessor = Callable[[], EnvironmentalInputs | Mapping[str, Any]]
DisplaySink = Callable[[TickResult], None]


@dataclass
class _RunState:
    """Mutable internal run state."""

    soh: float
    cycle: int = 0
    running: bool = False

    def to_snapshot(self) -> SimulationState:
        return SimulationState(
            state_of_health_pct=self.soh,
            cycle_count=self.cycle,
            running=self.running,
        )


class SimulationEngine:
    """Owns one simulated cell and steps it through degradation cycles.

    Usage::

        engine = SimulationEngine(input_accessor=lambda: sliders.read())
        engine.start()
        result = engine.tick()          # pulls inputs from the accessor
        result.state.state_of_health_pct
        engine.history.labels()
        engine.stop()                   # SoH and cycle count are kept

    Parameters
    ----------
    model : DegradationModel | None
        Rate model; defaults to the reference coefficients.
    config : EngineConfig | None
        SoH bounds, damping and history capacity.
    metrics : MetricsConfig | None
        Constants for the derived display indicators.
    input_accessor : callable | None
        Returns the current inputs; called once per tick when ``tick`` is
        given no explicit inputs.
    sink : callable | None
        Receives every :class:`TickResult`.
    """

    def __init__(
        self,
        model: DegradationModel | None = None,
        config: EngineConfig | None = None,
        metrics: MetricsConfig | None = None,
        input_accessor: InputAccessor | None = None,
        sink: DisplaySink | None = None,
    ) -> None:
        self._model = model or DegradationModel()
        self._config = config or EngineConfig()
        self._metrics = metrics or MetricsConfig()
        self._input_accessor = input_accessor
        self._sink = sink

        self._state = _RunState(soh=self._config.initial_soh_pct)
        self._history = HistoryBuffer(self._config.history_capacity)
        self._history_view = HistoryView(self._history)
        self._last_result: TickResult | None = None

        # start/stop/tick serialize here so a stop can never land between
        # a tick's running check and its mutation.
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: MonitorConfig,
        input_accessor: InputAccessor | None = None,
        sink: DisplaySink | None = None,
    ) -> SimulationEngine:
        """Build an engine from a full :class:`MonitorConfig` bundle."""
        return cls(
            model=DegradationModel(config.model),
            config=config.engine,
            metrics=config.metrics,
            input_accessor=input_accessor,
            sink=sink,
        )

    # ── Read-only views ─────────────────────────────────────────────────

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def model(self) -> DegradationModel:
        return self._model

    @property
    def state(self) -> SimulationState:
        """Snapshot of SoH, cycle count and running flag."""
        with self._lock:
            return self._state.to_snapshot()

    @property
    def is_running(self) -> bool:
        return self._state.running

    @property
    def history(self) -> HistoryView:
        """Read-only view of the chart history; rows arrive only via :meth:`tick`."""
        return self._history_view

    @property
    def last_result(self) -> TickResult | None:
        """Most recent tick output, or None before the first tick."""
        return self._last_result

    # ── Transitions ─────────────────────────────────────────────────────

    def start(self) -> bool:
        """Stopped → Running. Returns False (and does nothing) if already running."""
        with self._lock:
            if self._state.running:
                logger.debug("start() ignored: already running")
                return False
            self._state.running = True
        logger.info("Simulation started at cycle %d (SoH=%.1f%%)", self._state.cycle, self._state.soh)
        return True

    def stop(self) -> bool:
        """Running → Stopped. SoH and cycle count are preserved."""
        with self._lock:
            if not self._state.running:
                logger.debug("stop() ignored: not running")
                return False
            self._state.running = False
        logger.info("Simulation stopped at cycle %d (SoH=%.1f%%)", self._state.cycle, self._state.soh)
        return True

    # ── Tick ────────────────────────────────────────────────────────────

    def tick(self, inputs: EnvironmentalInputs | Mapping[str, Any] | None = None) -> TickResult | None:
        """Advance one cycle. No-op returning None unless running.

        Raises
        ------
        pydantic.ValidationError
            If the inputs contain NaN/inf or are otherwise malformed. State
            and history are left untouched.
        RuntimeError
            If no inputs are given and no accessor was injected.
        """
        if not self._state.running:
            return None

        if inputs is None:
            if self._input_accessor is None:
                raise RuntimeError("tick() called without inputs and no input_accessor configured")
            inputs = self._input_accessor()
        snapshot = EnvironmentalInputs.model_validate(inputs)

        with self._lock:
            if not self._state.running:
                return None
            result = self._apply(snapshot)
            self._last_result = result

        logger.debug(
            "Cycle %d: SoH=%.1f%%, Deg=%.3f%%",
            result.state.cycle_count,
            result.state.state_of_health_pct,
            result.degradation_rate_pct,
        )
        if self._sink is not None:
            self._sink(result)
        return result

    def _apply(self, inputs: EnvironmentalInputs) -> TickResult:
        cfg = self._config

        # ── 1. Rate for the cycle about to complete ─────────────────────
        rate = self._model.predict(inputs, self._state.cycle)

        # ── 2. Damped SoH update, floored ───────────────────────────────
        self._state.soh = max(cfg.soh_floor_pct, self._state.soh - rate / cfg.damping_divisor)

        # ── 3. Count the cycle ──────────────────────────────────────────
        self._state.cycle += 1

        # ── 4. Display metrics ──────────────────────────────────────────
        metrics = compute_display_metrics(rate, self._metrics)

        # ── 5. History row ──────────────────────────────────────────────
        sample = DegradationSample(
            cycle_label=f"{cfg.cycle_label_prefix}{self._state.cycle}",
            cycle=self._state.cycle,
            state_of_health_pct=self._state.soh,
            temperature_c=inputs.temperature_c,
            salt_ppm=inputs.salt_ppm,
            depth_of_discharge_pct=inputs.depth_of_discharge_pct,
            degradation_rate_pct=rate,
        )
        evicted = self._history.append(sample)

        return TickResult(
            state=self._state.to_snapshot(),
            degradation_rate_pct=rate,
            metrics=metrics,
            sample=sample,
            evicted=evicted,
            history=self._history.entries(),
        )
