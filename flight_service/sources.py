"""
Injectable time and randomness.

The engine never reads the wall clock or the global ``random`` module directly;
callers hand in a ``Clock`` and a ``RandomSource`` so that tests can script both.
"""
from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now_ms(self) -> int:
        """Current instant in milliseconds since the epoch."""
        ...


class RandomSource(Protocol):
    def random(self) -> float:
        """Next uniform float in [0, 1)."""
        ...


class SystemClock:
    """Wall-clock time at millisecond resolution."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)
