"""
Integration shell: feeds, configuration, snapshots
"""

from .config import config_from_mapping, load_config
from .feed import FeedRound, InMemoryPriceFeed
from .snapshot import OracleSnapshot, snapshot_from_oracle

__all__ = [
    "config_from_mapping",
    "load_config",
    "FeedRound",
    "InMemoryPriceFeed",
    "OracleSnapshot",
    "snapshot_from_oracle",
]
