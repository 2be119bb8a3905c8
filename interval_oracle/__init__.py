"""
Regular-interval price/volatility oracle
"""

from .core.errors import (
    AuthorizationError,
    FeedResolutionError,
    NotDueError,
    OracleError,
    RangeError,
    SequenceError,
)
from .core.optimizer import HistoricalWindow, ParameterOptimizer, RecomputePlan
from .core.oracle import RegularIntervalOracle
from .state import OracleConfig, OracleParams, PricePoint, RollingHistory

__all__ = [
    "AuthorizationError",
    "FeedResolutionError",
    "NotDueError",
    "OracleError",
    "RangeError",
    "SequenceError",
    "HistoricalWindow",
    "ParameterOptimizer",
    "RecomputePlan",
    "RegularIntervalOracle",
    "OracleConfig",
    "OracleParams",
    "PricePoint",
    "RollingHistory",
]
