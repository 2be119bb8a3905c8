"""EWMA volatility recursion in integer fixed point.

    var' = (lambda * vol^2 + (1e4 - lambda) * (r * 1e4)^2 * 365) // 1e4
    vol' = isqrt(var')

where ``r = floor(new * 1e4 / prior) - 1e4`` is the one-period return in
basis points of 1e4 and ``vol`` is annualized volatility in percent x1e6.
``r * 1e4`` lifts the return into the same unit as ``vol``.
"""

from __future__ import annotations

from typing import List, Sequence

from .fixed_point import (
    LAMBDA_SCALE,
    PERIODS_PER_YEAR,
    RETURN_SCALE,
    RETURN_TO_VOL,
    isqrt_floor,
    scaled_ratio,
    weighted_blend,
)


def period_return(prior_price: int, new_price: int) -> int:
    """One-period return, x1e4, floored: ``floor(new * 1e4 / prior) - 1e4``."""
    if prior_price <= 0:
        raise ValueError(f"prior_price must be positive: {prior_price}")
    if new_price <= 0:
        raise ValueError(f"new_price must be positive: {new_price}")
    return scaled_ratio(new_price, prior_price, RETURN_SCALE) - RETURN_SCALE


def annualized_return_variance(prior_price: int, new_price: int) -> int:
    """Squared return in volatility units, scaled to a year of periods."""
    x = period_return(prior_price, new_price) * RETURN_TO_VOL
    return x * x * PERIODS_PER_YEAR


def next_volatility(prior_vol: int, decay_factor: int, prior_price: int, new_price: int) -> int:
    """Blend the prior variance with the new squared return and take the floor sqrt."""
    if prior_vol < 0:
        raise ValueError(f"prior_vol must be non-negative: {prior_vol}")
    variance = weighted_blend(
        decay_factor,
        prior_vol * prior_vol,
        annualized_return_variance(prior_price, new_price),
        LAMBDA_SCALE,
    )
    return isqrt_floor(variance)


def recompute_series(seed_vol: int, decay_factor: int, prices: Sequence[int]) -> List[int]:
    """
    Volatility series over *prices*, seeded at ``prices[0]`` with *seed_vol*.

    Returns one volatility per price; ``out[0] == seed_vol``.
    """
    if not prices:
        return []
    out = [seed_vol]
    for prev, cur in zip(prices, prices[1:]):
        out.append(next_volatility(out[-1], decay_factor, prev, cur))
    return out
