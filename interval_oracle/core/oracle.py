"""
Regular-interval price/volatility oracle.

Imperative shell around the functional pieces in this package:
- ``time_grid`` maps timestamps to bucket keys,
- ``round_resolver`` locates feed rounds,
- ``volatility`` computes the EWMA update,
- ``optimizer`` re-fits the decay factor over a loaded window,
- ``RollingHistory`` stores committed buckets.

Every mutating method takes the caller identity explicitly and checks it
against the ``AccessGate`` first. Each method validates everything it needs
before writing, so a raised ``OracleError`` leaves the oracle unchanged.
``advance_many`` is the exception by construction: steps that completed before
the failing one stay committed.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence, Tuple

from ..state.history import PricePoint, RollingHistory
from ..state.oracle_state import OracleConfig, OracleParams
from .access import AccessGate
from .errors import FeedResolutionError, NotDueError
from .optimizer import HistoricalWindow, ParameterOptimizer, RecomputePlan
from .round_resolver import PriceFeed, resolve_round
from .time_grid import is_due, next_bucket, normalize
from .volatility import next_volatility

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def system_clock() -> int:
    return int(time.time())


def _read_price(feed: PriceFeed, round_id: int) -> int:
    price = feed.price_of(round_id)
    if not isinstance(price, int) or isinstance(price, bool) or price <= 0:
        raise FeedResolutionError(f"round {round_id} has no positive price: {price!r}")
    return int(price)


class RegularIntervalOracle:
    """Time-bucketed price and EWMA volatility oracle. Build with ``create``."""

    def __init__(
        self,
        *,
        params: OracleParams,
        history: RollingHistory,
        gate: AccessGate,
        feed: PriceFeed,
        feed_address: str,
        last_round_id: int,
        current_volatility: int,
        clock: Clock = system_clock,
        max_round_steps: int,
    ) -> None:
        self._params = params
        self._history = history
        self._gate = gate
        self._feed = feed
        self._feed_address = feed_address
        self._last_round_id = last_round_id
        self._current_volatility = current_volatility
        self._clock = clock
        self._max_round_steps = max_round_steps
        self._optimizer = ParameterOptimizer(window_size=params.window_size)

    @classmethod
    def create(
        cls,
        config: OracleConfig,
        feed: PriceFeed,
        *,
        clock: Optional[Clock] = None,
    ) -> "RegularIntervalOracle":
        """Commit the start bucket from ``config.start_round_id`` and return the oracle."""
        if config.start_round_id > feed.latest_round_id():
            raise FeedResolutionError(
                f"start round {config.start_round_id} is beyond the feed (latest {feed.latest_round_id()})"
            )
        price = _read_price(feed, config.start_round_id)
        first = PricePoint(
            bucket=config.start_timestamp,
            price=price,
            volatility=config.initial_volatility,
        )
        oracle = cls(
            params=config.params(),
            history=RollingHistory.start(first),
            gate=AccessGate(principal=config.principal),
            feed=feed,
            feed_address=config.feed_address,
            last_round_id=config.start_round_id,
            current_volatility=config.initial_volatility,
            clock=clock or system_clock,
            max_round_steps=config.max_round_steps,
        )
        logger.info(
            "oracle created at bucket %d from round %d (price=%d, volatility=%d)",
            first.bucket,
            config.start_round_id,
            first.price,
            first.volatility,
        )
        return oracle

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def params(self) -> OracleParams:
        return self._params

    @property
    def history(self) -> RollingHistory:
        return self._history

    def get_decimals(self) -> int:
        return self._params.decimals

    def get_current_parameters(self) -> Tuple[int, int]:
        return self._params.decay_factor, self._params.window_size

    def get_info(self) -> Tuple[str, str]:
        return self._feed_address, self._gate.principal

    def get_latest_timestamp(self) -> int:
        return self._history.latest_bucket

    def get_oldest_timestamp(self) -> int:
        return self._history.oldest_bucket

    def get_interval(self) -> int:
        return self._params.interval

    def get_current_volatility(self) -> int:
        return self._current_volatility

    def get_last_round_id(self) -> int:
        return self._last_round_id

    def get_price(self) -> int:
        return self._history.latest_price()

    def get_normalized_timestamp(self, timestamp: int) -> int:
        return normalize(timestamp, self._params.interval)

    def get_price_at(self, timestamp: int) -> int:
        return self._history.price_at(self.get_normalized_timestamp(timestamp))

    def get_volatility_at(self, timestamp: int) -> int:
        return self._history.volatility_at(self.get_normalized_timestamp(timestamp))

    def resolve_round(self, search_offset: int, timestamp: int) -> int:
        return resolve_round(
            self._feed,
            cursor=self._last_round_id,
            search_offset=search_offset,
            target_timestamp=timestamp,
            max_steps=self._max_round_steps,
        )

    def historical_window(self) -> Optional[HistoricalWindow]:
        return self._optimizer.window()

    def next_due_at(self) -> int:
        return next_bucket(self._history.latest_bucket, self._params.interval)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def advance_one(self, caller: str, search_offset: int = 0) -> PricePoint:
        """Commit the next bucket from the feed round current at its start."""
        self._gate.authorize(caller)
        return self._advance(search_offset)

    def advance_many(self, caller: str, search_offsets: Sequence[int]) -> List[PricePoint]:
        """
        ``advance_one`` for each offset, in order.

        The first failure propagates; buckets committed by earlier steps remain.
        """
        self._gate.authorize(caller)
        committed: List[PricePoint] = []
        for offset in search_offsets:
            committed.append(self._advance(offset))
        return committed

    def catch_up(self, caller: str, search_offset: int = 0) -> List[PricePoint]:
        """Advance until the next bucket is no longer due."""
        self._gate.authorize(caller)
        committed: List[PricePoint] = []
        while is_due(self._history.latest_bucket, self._params.interval, self._clock()):
            committed.append(self._advance(search_offset))
        return committed

    def insert_historical_window(
        self, caller: str, prices: Sequence[int], volatilities: Sequence[int]
    ) -> HistoricalWindow:
        self._gate.authorize(caller)
        window = self._optimizer.load_window(prices, volatilities)
        logger.info("historical window loaded (%d points)", len(window))
        return window

    def set_optimized_parameters(self, caller: str, decay_factor: int) -> RecomputePlan:
        """Adopt *decay_factor* and rewrite window volatilities in the history."""
        self._gate.authorize(caller)
        plan = self._optimizer.plan(
            decay_factor,
            latest_bucket=self._history.latest_bucket,
            interval=self._params.interval,
        )

        rewritten = 0
        for bucket, vol in zip(plan.buckets, plan.volatilities):
            # Window points older than the first committed bucket have no entry.
            if self._history.contains(bucket):
                self._history.replace_volatility(bucket, vol)
                rewritten += 1

        previous = self._params.decay_factor
        self._params = self._params.with_decay_factor(plan.decay_factor)
        self._current_volatility = plan.current_volatility
        logger.info(
            "decay factor %d -> %d; %d buckets recomputed, current volatility %d",
            previous,
            plan.decay_factor,
            rewritten,
            plan.current_volatility,
        )
        return plan

    def update_principal(self, caller: str, new_principal: str) -> None:
        self._gate.update_principal(caller, new_principal)

    # ------------------------------------------------------------------

    def _advance(self, search_offset: int) -> PricePoint:
        interval = self._params.interval
        latest = self._history.latest()
        due_at = self.next_due_at()
        now = self._clock()
        if now < due_at:
            logger.warning("advance rejected: bucket %d not due (now=%d)", due_at, now)
            raise NotDueError(due_at=due_at, now=now)

        round_id = self.resolve_round(search_offset, due_at)
        price = _read_price(self._feed, round_id)
        vol = next_volatility(self._current_volatility, self._params.decay_factor, latest.price, price)

        point = self._history.append(due_at, price, vol, interval=interval)
        self._last_round_id = round_id
        self._current_volatility = vol
        logger.info(
            "committed bucket %d from round %d (price=%d, volatility=%d)",
            point.bucket,
            round_id,
            point.price,
            point.volatility,
        )
        return point
