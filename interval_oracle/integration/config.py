"""
YAML configuration for the oracle.

Example::

    decimals: 8
    decay_factor: 9500
    window_size: 14
    initial_volatility: 90000000
    principal: ops
    feed_address: feed:eth-usd
    start_timestamp: 1609459200
    interval: 86400
    start_round_id: 2
    max_round_steps: 256   # optional

Unknown keys are rejected so typos fail loudly.
"""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from ..state.oracle_state import OracleConfig

_CONFIG_FIELDS = tuple(f.name for f in fields(OracleConfig))
_REQUIRED_FIELDS = tuple(name for name in _CONFIG_FIELDS if name != "max_round_steps")


def config_from_mapping(obj: Mapping[str, Any]) -> OracleConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("oracle config must be a mapping")
    unknown = sorted(set(obj) - set(_CONFIG_FIELDS))
    if unknown:
        raise ValueError(f"unknown oracle config keys: {', '.join(map(str, unknown))}")
    missing = [name for name in _REQUIRED_FIELDS if name not in obj]
    if missing:
        raise ValueError(f"missing oracle config keys: {', '.join(missing)}")
    return OracleConfig(**{name: obj[name] for name in _CONFIG_FIELDS if name in obj})


def load_config(path: Union[str, Path]) -> OracleConfig:
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        raise ValueError(f"empty oracle config: {path}")
    return config_from_mapping(obj)


def dump_config(config: OracleConfig) -> str:
    return yaml.safe_dump({name: getattr(config, name) for name in _CONFIG_FIELDS}, sort_keys=False)
