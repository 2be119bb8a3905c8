"""Tests for the bounded feed round walk."""

from __future__ import annotations

import pytest

from interval_oracle.core.errors import FeedResolutionError
from interval_oracle.core.round_resolver import resolve_round
from interval_oracle.integration.feed import InMemoryPriceFeed


def _feed(timestamps):
    return InMemoryPriceFeed.from_rows((ts, 100 + i) for i, ts in enumerate(timestamps))


class CountingFeed:
    """Wraps a feed and counts timestamp queries."""

    def __init__(self, inner: InMemoryPriceFeed) -> None:
        self.inner = inner
        self.timestamp_calls = 0

    def latest_round_id(self) -> int:
        return self.inner.latest_round_id()

    def timestamp_of(self, round_id: int) -> int:
        self.timestamp_calls += 1
        return self.inner.timestamp_of(round_id)

    def price_of(self, round_id: int) -> int:
        return self.inner.price_of(round_id)


FEED_TS = [100, 200, 300, 400, 500, 600]


def test_forward_walk_finds_latest_round_at_or_before_target() -> None:
    feed = _feed(FEED_TS)
    assert resolve_round(feed, cursor=2, search_offset=0, target_timestamp=450, max_steps=16) == 4


def test_exact_timestamp_match_resolves_to_that_round() -> None:
    feed = _feed(FEED_TS)
    assert resolve_round(feed, cursor=1, search_offset=0, target_timestamp=400, max_steps=16) == 4


def test_backward_walk_when_reference_is_after_target() -> None:
    feed = _feed(FEED_TS)
    assert resolve_round(feed, cursor=6, search_offset=0, target_timestamp=250, max_steps=16) == 2


def test_target_after_last_round_resolves_to_latest() -> None:
    feed = _feed(FEED_TS)
    assert resolve_round(feed, cursor=3, search_offset=0, target_timestamp=10_000, max_steps=16) == 6


def test_equal_timestamps_resolve_to_highest_id() -> None:
    feed = _feed([100, 200, 200, 200, 300])
    assert resolve_round(feed, cursor=1, search_offset=0, target_timestamp=200, max_steps=16) == 4


def test_search_offset_moves_reference_back() -> None:
    feed = CountingFeed(_feed(FEED_TS))
    # Reference round 5 - 3 = 2; walk forward to 4.
    assert resolve_round(feed, cursor=5, search_offset=3, target_timestamp=400, max_steps=16) == 4
    assert feed.timestamp_calls == 4


def test_search_offset_clamps_at_first_round() -> None:
    feed = _feed(FEED_TS)
    assert resolve_round(feed, cursor=2, search_offset=50, target_timestamp=300, max_steps=16) == 3


def test_cursor_beyond_latest_is_clamped() -> None:
    feed = _feed(FEED_TS)
    assert resolve_round(feed, cursor=99, search_offset=0, target_timestamp=600, max_steps=16) == 6


def test_target_before_first_round_fails() -> None:
    feed = _feed(FEED_TS)
    with pytest.raises(FeedResolutionError):
        resolve_round(feed, cursor=3, search_offset=0, target_timestamp=50, max_steps=16)


def test_walk_bound_is_enforced_forward() -> None:
    feed = _feed(list(range(0, 1000, 10)))
    with pytest.raises(FeedResolutionError):
        resolve_round(feed, cursor=1, search_offset=0, target_timestamp=990, max_steps=10)


def test_walk_bound_is_enforced_backward() -> None:
    feed = _feed(list(range(0, 1000, 10)))
    with pytest.raises(FeedResolutionError):
        resolve_round(feed, cursor=100, search_offset=0, target_timestamp=0, max_steps=10)


def test_walk_within_bound_succeeds() -> None:
    feed = _feed(list(range(0, 1000, 10)))
    assert resolve_round(feed, cursor=1, search_offset=0, target_timestamp=100, max_steps=10) == 11


def test_negative_offset_rejected() -> None:
    feed = _feed(FEED_TS)
    with pytest.raises(FeedResolutionError):
        resolve_round(feed, cursor=2, search_offset=-1, target_timestamp=300, max_steps=16)


def test_empty_feed_rejected() -> None:
    feed = InMemoryPriceFeed()
    with pytest.raises(FeedResolutionError):
        resolve_round(feed, cursor=1, search_offset=0, target_timestamp=300, max_steps=16)
