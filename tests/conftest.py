"""Shared fixtures: a six-round feed laid out around a fixed "today".

Rounds are 12 hours apart and round 2 lands exactly on the start bucket, so
round 4 is current at ``START + DAY`` and round 6 at ``TODAY``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import pytest

from interval_oracle import OracleConfig, RegularIntervalOracle
from interval_oracle.integration.feed import InMemoryPriceFeed

DAY = 86_400
TODAY = 19_676 * DAY
START = TODAY - 2 * DAY
PRINCIPAL = "quants"
FEED_ADDRESS = "feed:eth-usd"

FEED_PRICES = [p * 10**8 for p in (1340, 1300, 1420, 1370, 1390, 1330)]
INITIAL_VOL = 90 * 10**6


class FakeClock:
    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@dataclass
class Scenario:
    oracle: RegularIntervalOracle
    feed: InMemoryPriceFeed
    clock: FakeClock


def half_day_feed(prices: Sequence[int], *, first_timestamp: int = START - DAY // 2) -> InMemoryPriceFeed:
    return InMemoryPriceFeed.from_rows(
        ((first_timestamp + i * (DAY // 2), p) for i, p in enumerate(prices)),
        address=FEED_ADDRESS,
    )


def default_config(**overrides) -> OracleConfig:
    kwargs = dict(
        decimals=8,
        decay_factor=9500,
        window_size=14,
        initial_volatility=INITIAL_VOL,
        principal=PRINCIPAL,
        feed_address=FEED_ADDRESS,
        start_timestamp=START,
        interval=DAY,
        start_round_id=2,
    )
    kwargs.update(overrides)
    return OracleConfig(**kwargs)


@pytest.fixture
def make_scenario() -> Callable[..., Scenario]:
    def _make(
        prices: Sequence[int] = FEED_PRICES,
        *,
        now: int = TODAY + 3600,
        **config_overrides,
    ) -> Scenario:
        feed = half_day_feed(prices)
        clock = FakeClock(now)
        oracle = RegularIntervalOracle.create(default_config(**config_overrides), feed, clock=clock)
        return Scenario(oracle=oracle, feed=feed, clock=clock)

    return _make


@pytest.fixture
def scenario(make_scenario) -> Scenario:
    return make_scenario()
