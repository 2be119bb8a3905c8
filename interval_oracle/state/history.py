"""
Rolling price/volatility history (v1).

Append-only table of ``bucket -> PricePoint``. Buckets are committed strictly in
increasing order, exactly one ``interval`` apart. Prices are never rewritten;
the only in-place mutation is ``replace_volatility`` (used by the window
recompute in the parameter optimizer).
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Tuple

from ..core.errors import RangeError, SequenceError
from ..core.fixed_point import require_int


@dataclass(frozen=True)
class PricePoint:
    """Price and volatility applicable from ``bucket`` until superseded."""

    bucket: int
    price: int
    volatility: int

    def __post_init__(self) -> None:
        for name in ("bucket", "price", "volatility"):
            require_int(getattr(self, name), name=name)
        if self.bucket < 0:
            raise ValueError(f"bucket must be non-negative: {self.bucket}")
        if self.price <= 0:
            raise ValueError(f"price must be positive: {self.price}")
        if self.volatility < 0:
            raise ValueError(f"volatility must be non-negative: {self.volatility}")

    def with_volatility(self, volatility: int) -> "PricePoint":
        return replace(self, volatility=volatility)


@dataclass
class RollingHistory:
    """
    Mutable mapping: bucket -> PricePoint, plus a sorted key index.

    Construct with ``RollingHistory.start(point)``; an empty history has no
    valid ``latest_bucket``.
    """

    _points: Dict[int, PricePoint] = field(default_factory=dict)
    _keys: List[int] = field(default_factory=list)

    @classmethod
    def start(cls, point: PricePoint) -> "RollingHistory":
        history = cls()
        history._points[point.bucket] = point
        history._keys.append(point.bucket)
        return history

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def oldest_bucket(self) -> int:
        if not self._keys:
            raise RangeError("history is empty")
        return self._keys[0]

    @property
    def latest_bucket(self) -> int:
        if not self._keys:
            raise RangeError("history is empty")
        return self._keys[-1]

    def latest(self) -> PricePoint:
        return self._points[self.latest_bucket]

    def latest_price(self) -> int:
        return self.latest().price

    def contains(self, bucket: int) -> bool:
        return bucket in self._points

    def point_at(self, bucket: int) -> PricePoint:
        """
        Entry applicable at *bucket*.

        Raises RangeError outside ``[oldest_bucket, latest_bucket]``. Inside the
        range, returns the entry committed at *bucket* or the most recent one
        before it.
        """
        if bucket < self.oldest_bucket or bucket > self.latest_bucket:
            raise RangeError(
                f"bucket {bucket} outside [{self.oldest_bucket}, {self.latest_bucket}]"
            )
        hit = self._points.get(bucket)
        if hit is not None:
            return hit
        idx = bisect.bisect_right(self._keys, bucket) - 1
        return self._points[self._keys[idx]]

    def price_at(self, bucket: int) -> int:
        return self.point_at(bucket).price

    def volatility_at(self, bucket: int) -> int:
        return self.point_at(bucket).volatility

    def append(self, bucket: int, price: int, volatility: int, *, interval: int) -> PricePoint:
        expected = self.latest_bucket + interval
        if bucket != expected:
            raise SequenceError(expected=expected, got=bucket)
        point = PricePoint(bucket=bucket, price=price, volatility=volatility)
        self._points[bucket] = point
        self._keys.append(bucket)
        return point

    def replace_volatility(self, bucket: int, volatility: int) -> PricePoint:
        current = self._points.get(bucket)
        if current is None:
            raise RangeError(f"bucket {bucket} is not committed")
        updated = current.with_volatility(volatility)
        self._points[bucket] = updated
        return updated

    def points(self) -> Iterator[PricePoint]:
        for k in self._keys:
            yield self._points[k]

    def tail(self, n: int) -> Tuple[PricePoint, ...]:
        """The last *n* committed points, oldest first."""
        if n <= 0:
            return ()
        return tuple(self._points[k] for k in self._keys[-n:])
