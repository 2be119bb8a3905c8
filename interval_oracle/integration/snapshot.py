"""
Oracle state snapshot encoding.

Goals:
- Deterministic JSON serialization for hashing / audit trails.
- Explicit versioning.

The commitment covers parameters, cursor, principal, and every committed
bucket (price and volatility), so any rewrite of history changes it.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Dict

from ..core.oracle import RegularIntervalOracle
from ..state.canonical import canonical_json_bytes, domain_sep_bytes, sha256_hex


ORACLE_SNAPSHOT_VERSION = 1


@dataclass(frozen=True)
class OracleSnapshot:
    """
    Deterministic, versioned snapshot of a ``RegularIntervalOracle``.

    The commitment is *not* included inside `data` to avoid self-reference.
    """

    version: int
    data: Dict[str, Any]

    def canonical_bytes(self) -> bytes:
        return canonical_json_bytes(self.data)

    def commitment_bytes(self) -> bytes:
        payload = domain_sep_bytes("oracle_snapshot", version=self.version) + self.canonical_bytes()
        return hashlib.sha256(payload).digest()

    def commitment_hex(self) -> str:
        payload = domain_sep_bytes("oracle_snapshot", version=self.version) + self.canonical_bytes()
        return sha256_hex(payload)


def snapshot_from_oracle(oracle: RegularIntervalOracle, *, version: int = ORACLE_SNAPSHOT_VERSION) -> OracleSnapshot:
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")

    feed_address, principal = oracle.get_info()
    params = oracle.params
    points = [
        {"bucket": int(p.bucket), "price": int(p.price), "volatility": int(p.volatility)}
        for p in oracle.history.points()
    ]

    data: Dict[str, Any] = {
        "version": int(version),
        "params": {
            "decimals": int(params.decimals),
            "decay_factor": int(params.decay_factor),
            "window_size": int(params.window_size),
            "interval": int(params.interval),
        },
        "feed_address": feed_address,
        "principal": principal,
        "last_round_id": int(oracle.get_last_round_id()),
        "current_volatility": int(oracle.get_current_volatility()),
        "oldest_bucket": int(oracle.get_oldest_timestamp()),
        "latest_bucket": int(oracle.get_latest_timestamp()),
        "points": points,
    }
    return OracleSnapshot(version=version, data=data)
