"""Oracle parameters and initial configuration.

``OracleParams`` holds the tunable numeric parameters (immutable; a
re-optimization produces a new instance via ``with_decay_factor``).
``OracleConfig`` is everything needed to create an oracle.

Both validate eagerly in ``__post_init__`` and reject bools where ints are
expected.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..core.fixed_point import LAMBDA_SCALE, require_int
from ..core.time_grid import DAY_SECONDS, is_day_aligned

# Open interval (LAMBDA_MIN_EXCLUSIVE, LAMBDA_MAX_EXCLUSIVE)
LAMBDA_MIN_EXCLUSIVE: int = 9_000
LAMBDA_MAX_EXCLUSIVE: int = LAMBDA_SCALE

MIN_WINDOW_SIZE: int = 2
MAX_DECIMALS: int = 36
DEFAULT_MAX_ROUND_STEPS: int = 256


def decay_factor_in_range(decay_factor: int) -> bool:
    return LAMBDA_MIN_EXCLUSIVE < decay_factor < LAMBDA_MAX_EXCLUSIVE


@dataclass(frozen=True)
class OracleParams:
    decimals: int
    decay_factor: int
    window_size: int
    interval: int

    def __post_init__(self) -> None:
        for name in ("decimals", "decay_factor", "window_size", "interval"):
            require_int(getattr(self, name), name=name)
        if not (0 <= self.decimals <= MAX_DECIMALS):
            raise ValueError(f"decimals must be in [0, {MAX_DECIMALS}]: {self.decimals}")
        if not decay_factor_in_range(self.decay_factor):
            raise ValueError(
                f"decay_factor must be in ({LAMBDA_MIN_EXCLUSIVE}, {LAMBDA_MAX_EXCLUSIVE}): {self.decay_factor}"
            )
        if self.window_size < MIN_WINDOW_SIZE:
            raise ValueError(f"window_size must be >= {MIN_WINDOW_SIZE}: {self.window_size}")
        # History keys are bucket starts and lookups are normalized to days, so the
        # two only share a key space when one bucket is one day.
        if self.interval != DAY_SECONDS:
            raise ValueError(f"interval must be {DAY_SECONDS} seconds: {self.interval}")

    def with_decay_factor(self, decay_factor: int) -> "OracleParams":
        return replace(self, decay_factor=decay_factor)


@dataclass(frozen=True)
class OracleConfig:
    """Initialization inputs for ``RegularIntervalOracle.create``."""

    decimals: int
    decay_factor: int
    window_size: int
    initial_volatility: int
    principal: str
    feed_address: str
    start_timestamp: int
    interval: int
    start_round_id: int
    max_round_steps: int = DEFAULT_MAX_ROUND_STEPS

    def __post_init__(self) -> None:
        for name in ("initial_volatility", "start_timestamp", "start_round_id", "max_round_steps"):
            require_int(getattr(self, name), name=name)
        for name in ("principal", "feed_address"):
            val = getattr(self, name)
            if not isinstance(val, str):
                raise TypeError(f"{name} must be a string")
            if not val:
                raise ValueError(f"{name} must be non-empty")
        # Delegates numeric parameter checks.
        self.params()
        if self.initial_volatility < 0:
            raise ValueError(f"initial_volatility must be non-negative: {self.initial_volatility}")
        if not is_day_aligned(self.start_timestamp):
            raise ValueError(f"start_timestamp must be a non-negative multiple of {DAY_SECONDS}")
        if self.start_round_id < 1:
            raise ValueError(f"start_round_id must be >= 1: {self.start_round_id}")
        if self.max_round_steps <= 0:
            raise ValueError(f"max_round_steps must be positive: {self.max_round_steps}")

    def params(self) -> OracleParams:
        return OracleParams(
            decimals=self.decimals,
            decay_factor=self.decay_factor,
            window_size=self.window_size,
            interval=self.interval,
        )
