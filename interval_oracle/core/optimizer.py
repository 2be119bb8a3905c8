"""
Decay-factor re-optimization over a supplied historical window.

The window (``window_size`` prices and volatilities) is loaded separately from
the committed history. Re-optimizing with a new decay factor replays the EWMA
recursion across the window, seeded from its first volatility, and produces a
``RecomputePlan``: the new decay factor, the recomputed series, and the
history buckets it maps onto (the window ends at ``latest_bucket``).

This module only computes; ``RegularIntervalOracle`` authorizes and applies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from ..state.oracle_state import LAMBDA_MAX_EXCLUSIVE, LAMBDA_MIN_EXCLUSIVE, decay_factor_in_range
from .errors import RangeError
from .fixed_point import require_int
from .volatility import recompute_series


@dataclass(frozen=True)
class HistoricalWindow:
    prices: Tuple[int, ...]
    volatilities: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.prices) != len(self.volatilities):
            raise RangeError(
                f"window length mismatch: {len(self.prices)} prices, {len(self.volatilities)} volatilities"
            )
        for i, p in enumerate(self.prices):
            require_int(p, name=f"prices[{i}]")
            if p <= 0:
                raise ValueError(f"prices[{i}] must be positive: {p}")
        for i, v in enumerate(self.volatilities):
            require_int(v, name=f"volatilities[{i}]")
            if v < 0:
                raise ValueError(f"volatilities[{i}] must be non-negative: {v}")

    def __len__(self) -> int:
        return len(self.prices)


@dataclass(frozen=True)
class RecomputePlan:
    decay_factor: int
    buckets: Tuple[int, ...]
    volatilities: Tuple[int, ...]

    @property
    def current_volatility(self) -> int:
        return self.volatilities[-1]


def window_buckets(latest_bucket: int, interval: int, size: int) -> Tuple[int, ...]:
    """Bucket keys covered by a window of *size* points ending at *latest_bucket*."""
    first = latest_bucket - (size - 1) * interval
    return tuple(first + i * interval for i in range(size))


@dataclass
class ParameterOptimizer:
    window_size: int
    _window: Optional[HistoricalWindow] = field(default=None)

    def window(self) -> Optional[HistoricalWindow]:
        return self._window

    def load_window(self, prices: Sequence[int], volatilities: Sequence[int]) -> HistoricalWindow:
        """Validate and replace the working window (all-or-nothing)."""
        if len(prices) != self.window_size or len(volatilities) != self.window_size:
            raise RangeError(
                f"window must hold exactly {self.window_size} points "
                f"(got {len(prices)} prices, {len(volatilities)} volatilities)"
            )
        window = HistoricalWindow(prices=tuple(prices), volatilities=tuple(volatilities))
        self._window = window
        return window

    def plan(self, decay_factor: int, *, latest_bucket: int, interval: int) -> RecomputePlan:
        require_int(decay_factor, name="decay_factor")
        if not decay_factor_in_range(decay_factor):
            raise RangeError(
                f"decay_factor must be in ({LAMBDA_MIN_EXCLUSIVE}, {LAMBDA_MAX_EXCLUSIVE}): {decay_factor}"
            )
        window = self._window
        if window is None or len(window) != self.window_size:
            raise RangeError("no historical window of the configured size is loaded")

        series = recompute_series(window.volatilities[0], decay_factor, window.prices)
        return RecomputePlan(
            decay_factor=decay_factor,
            buckets=window_buckets(latest_bucket, interval, len(series)),
            volatilities=tuple(series),
        )
