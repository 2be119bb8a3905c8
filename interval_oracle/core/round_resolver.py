"""
Feed round resolution.

Finds the latest round of an external, append-only price feed whose timestamp
is at or before a target timestamp. The walk starts from a reference round
(the oracle's cursor moved back by ``search_offset``) and moves one round at a
time, forward or backward, under a hard step bound.

The feed is injected through the three-method ``PriceFeed`` protocol; no
transport is assumed.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .errors import FeedResolutionError

logger = logging.getLogger(__name__)

FIRST_ROUND_ID: int = 1


class PriceFeed(Protocol):
    """Round-indexed price feed (ids start at 1, timestamps non-decreasing)."""

    def latest_round_id(self) -> int: ...

    def timestamp_of(self, round_id: int) -> int: ...

    def price_of(self, round_id: int) -> int: ...


def resolve_round(
    feed: PriceFeed,
    *,
    cursor: int,
    search_offset: int,
    target_timestamp: int,
    max_steps: int,
) -> int:
    """
    Return the id of the latest round with ``timestamp <= target_timestamp``.

    Raises FeedResolutionError if the feed is empty, the target predates the
    first round, ``search_offset`` is negative, or the walk needs more than
    ``max_steps`` moves.
    """
    if search_offset < 0:
        raise FeedResolutionError(f"search_offset must be non-negative: {search_offset}")
    latest = feed.latest_round_id()
    if latest < FIRST_ROUND_ID:
        raise FeedResolutionError("feed has no rounds")

    current = min(max(cursor - search_offset, FIRST_ROUND_ID), latest)
    steps = 0

    if feed.timestamp_of(current) <= target_timestamp:
        while current < latest and feed.timestamp_of(current + 1) <= target_timestamp:
            current += 1
            steps += 1
            if steps > max_steps:
                raise FeedResolutionError(f"round walk exceeded {max_steps} steps (forward)")
    else:
        while feed.timestamp_of(current) > target_timestamp:
            if current == FIRST_ROUND_ID:
                raise FeedResolutionError(
                    f"no round at or before {target_timestamp}; first round is later"
                )
            current -= 1
            steps += 1
            if steps > max_steps:
                raise FeedResolutionError(f"round walk exceeded {max_steps} steps (backward)")

    logger.debug(
        "resolved round %d for target %d (cursor=%d offset=%d steps=%d)",
        current,
        target_timestamp,
        cursor,
        search_offset,
        steps,
    )
    return current
