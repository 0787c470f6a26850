"""Run-time statistics collectors for debugging: hit rates, means, deviations, extremes and correlations."""

from __future__ import annotations

import math
import threading
from typing import List

MAX_DEBUG_SLOTS = 32

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _div(num: float, den: float) -> float:
    if den:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num)


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def _fmt(x: float) -> str:
    return f"{x:g}"


class DebugStats:
    """A set of numbered slots collecting statistics, safe to feed from several threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reset()

    def _reset(self) -> None:
        self._hit = [[0, 0] for _ in range(MAX_DEBUG_SLOTS)]
        self._mean = [[0, 0] for _ in range(MAX_DEBUG_SLOTS)]
        self._stdev = [[0, 0, 0] for _ in range(MAX_DEBUG_SLOTS)]
        self._correl = [[0] * 6 for _ in range(MAX_DEBUG_SLOTS)]
        self._extremes = [[0, _INT64_MIN, _INT64_MAX] for _ in range(MAX_DEBUG_SLOTS)]

    @staticmethod
    def _check(slot: int) -> int:
        if not 0 <= slot < MAX_DEBUG_SLOTS:
            raise IndexError(f"debug slot {slot} out of range 0..{MAX_DEBUG_SLOTS - 1}")
        return slot

    def hit_on(self, cond: bool, slot: int = 0) -> None:
        """Count one event, and one hit if ``cond`` holds."""
        entry = self._hit[self._check(slot)]
        with self._lock:
            entry[0] += 1
            if cond:
                entry[1] += 1

    def mean_of(self, value: int, slot: int = 0) -> None:
        """Add a sample to the running mean of ``slot``."""
        entry = self._mean[self._check(slot)]
        with self._lock:
            entry[0] += 1
            entry[1] += value

    def stdev_of(self, value: int, slot: int = 0) -> None:
        """Add a sample to the standard deviation of ``slot``."""
        entry = self._stdev[self._check(slot)]
        with self._lock:
            entry[0] += 1
            entry[1] += value
            entry[2] += value * value

    def extremes_of(self, value: int, slot: int = 0) -> None:
        """Track the minimum and maximum samples of ``slot``."""
        entry = self._extremes[self._check(slot)]
        with self._lock:
            entry[0] += 1
            entry[1] = max(entry[1], value)
            entry[2] = min(entry[2], value)

    def correl_of(self, value1: int, value2: int, slot: int = 0) -> None:
        """Add a sample pair to the correlation coefficient of ``slot``."""
        entry = self._correl[self._check(slot)]
        with self._lock:
            entry[0] += 1
            entry[1] += value1
            entry[2] += value1 * value1
            entry[3] += value2
            entry[4] += value2 * value2
            entry[5] += value1 * value2

    def report(self) -> str:
        """Return one line per non-empty slot, grouped by statistic kind."""
        lines: List[str] = []
        with self._lock:
            for i, (n, hits) in enumerate(self._hit):
                if n:
                    lines.append(
                        f"Hit #{i}: Total {n} Hits {hits} Hit Rate (%) {_fmt(100.0 * hits / n)}"
                    )
            for i, (n, total) in enumerate(self._mean):
                if n:
                    lines.append(f"Mean #{i}: Total {n} Mean {_fmt(total / n)}")
            for i, (n, total, squares) in enumerate(self._stdev):
                if n:
                    r = _sqrt(squares / n - (total / n) ** 2)
                    lines.append(f"Stdev #{i}: Total {n} Stdev {_fmt(r)}")
            for i, (n, hi, lo) in enumerate(self._extremes):
                if n:
                    lines.append(f"Extremity #{i}: Total {n} Min {lo} Max {hi}")
            for i, (n, s1, sq1, s2, sq2, s12) in enumerate(self._correl):
                if n:
                    e1, e2 = s1 / n, s2 / n
                    cov = s12 / n - e1 * e2
                    den = _sqrt(sq1 / n - e1 * e1) * _sqrt(sq2 / n - e2 * e2)
                    lines.append(f"Correl. #{i}: Total {n} Coefficient {_fmt(_div(cov, den))}")
        return "".join(line + "\n" for line in lines)

    def clear(self) -> None:
        """Reset every slot."""
        with self._lock:
            self._reset()