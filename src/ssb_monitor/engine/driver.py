"""Periodic tick driver — owns the scheduling the engine deliberately lacks.

A daemon worker thread waits on a stop event for one interval, then calls
``engine.tick()``. Because the wait *is* the cancellation token, ``stop()``
wakes the worker immediately instead of letting one more tick fire.
"""

from __future__ import annotations

import logging
import threading

from ssb_monitor.engine.simulation import SimulationEngine

logger = logging.getLogger(__name__)


class TickDriver:
    """Cancellable fixed-interval ticker for one :class:`SimulationEngine`.

    Usage::

        driver = TickDriver(engine)          # interval from engine.config
        driver.start()
        ...
        driver.stop()
        if driver.last_error:
            raise driver.last_error

    Parameters
    ----------
    engine : SimulationEngine
        Engine to drive. Must have an input accessor injected.
    interval_s : float | None
        Seconds between ticks; defaults to ``engine.config.tick_interval_s``.
    """

    def __init__(self, engine: SimulationEngine, interval_s: float | None = None) -> None:
        interval = engine.config.tick_interval_s if interval_s is None else interval_s
        if interval <= 0:
            raise ValueError(f"interval_s must be > 0, got {interval}")
        self._engine = engine
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_error: BaseException | None = None

    @property
    def interval_s(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        """True while the worker is alive and the engine accepts ticks."""
        return self._thread is not None and self._thread.is_alive() and self._engine.is_running

    @property
    def last_error(self) -> BaseException | None:
        """Exception that halted the worker, if any."""
        return self._last_error

    def start(self) -> bool:
        """Start the engine and the ticker. No-op (False) if already ticking."""
        if self.is_running:
            return False
        # A worker left over from an engine stopped behind our back.
        self._stop_event.set()
        self._last_error = None
        self._stop_event = threading.Event()
        self._engine.start()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name="ssb-tick-driver",
            daemon=True,
        )
        self._thread.start()
        return True

    def stop(self, timeout: float | None = None) -> bool:
        """Cancel the ticker and stop the engine; state is preserved."""
        thread = self._thread
        if thread is None:
            return False
        self._stop_event.set()
        self._engine.stop()
        if thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        return True

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            if not self._engine.is_running:
                logger.debug("Engine stopped outside the driver; worker exiting")
                return
            try:
                self._engine.tick()
            except Exception as exc:
                logger.exception("Tick failed at cycle %d; stopping driver", self._engine.state.cycle_count)
                self._last_error = exc
                self._engine.stop()
                return
