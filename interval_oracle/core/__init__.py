"""
Core oracle algorithms

The ``RegularIntervalOracle`` facade and the optimizer depend on
``interval_oracle.state`` and are exported from the top-level package.
"""

from .access import AccessGate
from .errors import (
    AuthorizationError,
    FeedResolutionError,
    NotDueError,
    OracleError,
    RangeError,
    SequenceError,
)
from .round_resolver import PriceFeed, resolve_round
from .time_grid import DAY_SECONDS, normalize
from .volatility import next_volatility, period_return, recompute_series

__all__ = [
    "AccessGate",
    "AuthorizationError",
    "FeedResolutionError",
    "NotDueError",
    "OracleError",
    "RangeError",
    "SequenceError",
    "PriceFeed",
    "resolve_round",
    "DAY_SECONDS",
    "normalize",
    "next_volatility",
    "period_return",
    "recompute_series",
]
