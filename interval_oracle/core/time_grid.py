"""Bucket arithmetic for the oracle time grid.

Bucket keys are always expressed in the canonical 86400-second day unit, while
the number of elapsed periods is counted in ``interval`` seconds. For a daily
interval the two coincide.
"""

from __future__ import annotations

DAY_SECONDS: int = 86_400


def _check_interval(interval: int) -> None:
    if interval <= 0:
        raise ValueError(f"interval must be positive: {interval}")


def normalize(timestamp: int, interval: int) -> int:
    """Map *timestamp* to its bucket key: ``(timestamp // interval) * 86400``."""
    _check_interval(interval)
    if timestamp < 0:
        raise ValueError(f"timestamp must be non-negative: {timestamp}")
    return (timestamp // interval) * DAY_SECONDS


def next_bucket(bucket: int, interval: int) -> int:
    _check_interval(interval)
    return bucket + interval


def is_due(latest_bucket: int, interval: int, now: int) -> bool:
    """True once wall-clock time has reached the start of the next bucket."""
    return now >= next_bucket(latest_bucket, interval)


def is_day_aligned(bucket: int) -> bool:
    return bucket >= 0 and bucket % DAY_SECONDS == 0
