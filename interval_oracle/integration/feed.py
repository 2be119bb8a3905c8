"""
In-memory round-indexed price feed.

Implements the ``PriceFeed`` protocol over a list of ``(timestamp, price)``
rounds with ids starting at 1. Used for offline replay (``from_csv``) and as
the feed double in tests.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from ..core.round_resolver import FIRST_ROUND_ID


@dataclass(frozen=True)
class FeedRound:
    round_id: int
    timestamp: int
    price: int


@dataclass
class InMemoryPriceFeed:
    address: str = "feed:in-memory"
    _rounds: List[Tuple[int, int]] = field(default_factory=list)

    @classmethod
    def from_rows(cls, rows: Iterable[Tuple[int, int]], *, address: str = "feed:in-memory") -> "InMemoryPriceFeed":
        feed = cls(address=address)
        for timestamp, price in rows:
            feed.append_round(timestamp, price)
        return feed

    @classmethod
    def from_csv(cls, path: Union[str, Path], *, address: str | None = None) -> "InMemoryPriceFeed":
        """Load ``timestamp,price`` rows; a header may precede the first data row."""
        p = Path(path)
        rows: List[Tuple[int, int]] = []
        header_allowed = True
        with p.open(newline="", encoding="utf-8") as fh:
            for lineno, row in enumerate(csv.reader(fh), start=1):
                if not row or row[0].strip().startswith("#"):
                    continue
                is_header = header_allowed and not row[0].strip().lstrip("-").isdigit()
                header_allowed = False
                if is_header:
                    continue
                if len(row) < 2:
                    raise ValueError(f"{p}:{lineno}: expected 'timestamp,price'")
                try:
                    rows.append((int(row[0]), int(row[1])))
                except ValueError as exc:
                    raise ValueError(f"{p}:{lineno}: timestamp and price must be integers") from exc
        return cls.from_rows(rows, address=address or f"feed:{p.name}")

    def append_round(self, timestamp: int, price: int) -> int:
        for name, val in (("timestamp", timestamp), ("price", price)):
            if not isinstance(val, int) or isinstance(val, bool):
                raise TypeError(f"{name} must be an int")
        if timestamp < 0:
            raise ValueError(f"timestamp must be non-negative: {timestamp}")
        if self._rounds and timestamp < self._rounds[-1][0]:
            raise ValueError(
                f"round timestamps must be non-decreasing: {timestamp} < {self._rounds[-1][0]}"
            )
        self._rounds.append((timestamp, price))
        return self.latest_round_id()

    def latest_round_id(self) -> int:
        return len(self._rounds) + FIRST_ROUND_ID - 1

    def _round(self, round_id: int) -> Tuple[int, int]:
        idx = round_id - FIRST_ROUND_ID
        if idx < 0 or idx >= len(self._rounds):
            raise KeyError(f"unknown round id: {round_id}")
        return self._rounds[idx]

    def timestamp_of(self, round_id: int) -> int:
        return self._round(round_id)[0]

    def price_of(self, round_id: int) -> int:
        return self._round(round_id)[1]

    def get_round(self, round_id: int) -> FeedRound:
        timestamp, price = self._round(round_id)
        return FeedRound(round_id=round_id, timestamp=timestamp, price=price)
