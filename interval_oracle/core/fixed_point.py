"""Integer fixed-point helpers.

Every function is stateless and operates on plain Python ints.

Rounding is explicit: division uses Python's ``//`` (floor toward -inf) and
square roots use ``math.isqrt`` (floor). No floats are produced or accepted, so
historical values are reproducible bit-for-bit.
"""

from __future__ import annotations

import math

# Domain scales
LAMBDA_SCALE: int = 10_000  # decay factor, 9500 == 0.95
RETURN_SCALE: int = 10_000  # one-period return, 538 == 5.38%
VOL_SCALE: int = 1_000_000  # volatility, 90_000_000 == 90%
PERIODS_PER_YEAR: int = 365

# Return (x1e4) -> volatility units (x1e6 percent).
RETURN_TO_VOL: int = 100 * VOL_SCALE // RETURN_SCALE


def require_int(value: object, *, name: str) -> int:
    """Return *value* if it is a real int (bools rejected), else raise TypeError."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    return int(value)


def isqrt_floor(value: int) -> int:
    """Integer square root, rounded down."""
    if value < 0:
        raise ValueError(f"isqrt of negative value: {value}")
    return math.isqrt(value)


def scaled_ratio(numerator: int, denominator: int, scale: int) -> int:
    """``floor(numerator * scale / denominator)``."""
    if denominator == 0:
        raise ZeroDivisionError("scaled_ratio denominator is zero")
    return (numerator * scale) // denominator


def weighted_blend(weight: int, a: int, b: int, scale: int) -> int:
    """``floor((weight * a + (scale - weight) * b) / scale)``."""
    if not (0 <= weight <= scale):
        raise ValueError(f"weight must be in [0, {scale}]: {weight}")
    return (weight * a + (scale - weight) * b) // scale
