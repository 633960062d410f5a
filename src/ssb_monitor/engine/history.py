"""Bounded time-series history for charting.

One row per cycle, so the SoH series and every environmental series share
a single label sequence by construction. When the buffer is full, each
append evicts exactly one row: the oldest.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

import numpy as np
import pandas as pd

from ssb_monitor.models.results import SAMPLE_SERIES, DegradationSample


class HistoryBuffer:
    """Append-only FIFO of :class:`DegradationSample` rows.

    Parameters
    ----------
    capacity : int
        Maximum rows retained (30 for the live charts).
    """

    def __init__(self, capacity: int = 30) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._rows: deque[DegradationSample] = deque()

    # ── Mutation ────────────────────────────────────────────────────────

    def append(self, sample: DegradationSample) -> DegradationSample | None:
        """Add *sample* at the end. Returns the evicted row, if any."""
        self._rows.append(sample)
        if len(self._rows) > self._capacity:
            return self._rows.popleft()
        return None

    # ── Read-only views ─────────────────────────────────────────────────

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def latest(self) -> DegradationSample | None:
        """Most recent row, or None when empty."""
        return self._rows[-1] if self._rows else None

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[DegradationSample]:
        return iter(self.entries())

    def entries(self) -> tuple[DegradationSample, ...]:
        """Chronological snapshot; later appends do not affect it."""
        return tuple(self._rows)

    def labels(self) -> list[str]:
        """x-axis labels, oldest first."""
        return [s.cycle_label for s in self._rows]

    def series(self, name: str) -> np.ndarray:
        """One numeric column, index-aligned with :meth:`labels`."""
        if name not in SAMPLE_SERIES:
            raise KeyError(f"unknown series {name!r}; expected one of {SAMPLE_SERIES}")
        return np.array([getattr(s, name) for s in self._rows], dtype=float)

    def to_frame(self) -> pd.DataFrame:
        """Whole buffer as a DataFrame indexed by cycle label."""
        columns = ["cycle", *SAMPLE_SERIES]
        if not self._rows:
            return pd.DataFrame(columns=columns, index=pd.Index([], name="cycle_label"))
        df = pd.DataFrame([s.model_dump() for s in self._rows])
        return df.set_index("cycle_label")[columns]


class HistoryView:
    """Read-only facade over a :class:`HistoryBuffer`.

    Handed to consumers so rows can only ever arrive through the engine's
    tick; it reflects the live buffer but exposes no way to change it.
    """

    __slots__ = ("_buffer",)

    def __init__(self, buffer: HistoryBuffer) -> None:
        self._buffer = buffer

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    @property
    def latest(self) -> DegradationSample | None:
        return self._buffer.latest

    def __len__(self) -> int:
        return len(self._buffer)

    def __iter__(self) -> Iterator[DegradationSample]:
        return iter(self._buffer)

    def entries(self) -> tuple[DegradationSample, ...]:
        return self._buffer.entries()

    def labels(self) -> list[str]:
        return self._buffer.labels()

    def series(self, name: str) -> np.ndarray:
        return self._buffer.series(name)

    def to_frame(self) -> pd.DataFrame:
        return self._buffer.to_frame()
