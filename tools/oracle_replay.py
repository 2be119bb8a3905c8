#!/usr/bin/env python3
"""
Offline oracle replay.

Builds an oracle from a YAML config and a CSV feed (``timestamp,price`` rows,
round ids assigned from 1), advances it up to ``--now``, optionally
re-optimizes the decay factor over the last ``window_size`` committed buckets,
and prints a JSON summary including the snapshot commitment.

    python tools/oracle_replay.py --config oracle.yaml --feed rounds.csv --now 1700000000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from interval_oracle import OracleError, RegularIntervalOracle
from interval_oracle.integration.config import load_config
from interval_oracle.integration.feed import InMemoryPriceFeed
from interval_oracle.integration.snapshot import snapshot_from_oracle


def _summary(oracle: RegularIntervalOracle, committed: int) -> Dict[str, Any]:
    latest = oracle.get_latest_timestamp()
    decay_factor, window_size = oracle.get_current_parameters()
    return {
        "committed": committed,
        "oldest_bucket": oracle.get_oldest_timestamp(),
        "latest_bucket": latest,
        "price": oracle.get_price(),
        "volatility": oracle.get_volatility_at(latest),
        "decay_factor": decay_factor,
        "window_size": window_size,
        "last_round_id": oracle.get_last_round_id(),
        "commitment": snapshot_from_oracle(oracle).commitment_hex(),
    }


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Replay a CSV price feed through the regular-interval oracle.")
    ap.add_argument("--config", required=True, help="YAML oracle config")
    ap.add_argument("--feed", required=True, help="CSV of timestamp,price rows")
    ap.add_argument("--now", type=int, default=None, help="Wall-clock timestamp to replay up to (default: now)")
    ap.add_argument("--offset", type=int, default=0, help="Round search offset for each advance")
    ap.add_argument(
        "--lambda",
        dest="decay_factor",
        type=int,
        default=None,
        help="Re-optimize with this decay factor over the last window_size buckets",
    )
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = load_config(args.config)
    feed = InMemoryPriceFeed.from_csv(args.feed, address=config.feed_address)
    now = args.now if args.now is not None else int(time.time())
    oracle = RegularIntervalOracle.create(config, feed, clock=lambda: now)

    caller = config.principal
    try:
        committed = oracle.catch_up(caller, args.offset)
        if args.decay_factor is not None:
            window = list(oracle.history.tail(config.window_size))
            oracle.insert_historical_window(
                caller,
                [p.price for p in window],
                [p.volatility for p in window],
            )
            oracle.set_optimized_parameters(caller, args.decay_factor)
    except OracleError as exc:
        print(f"[oracle-replay] FAIL: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(_summary(oracle, len(committed)), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
