"""
State management for the regular-interval oracle
"""

from .history import PricePoint, RollingHistory
from .oracle_state import OracleConfig, OracleParams

__all__ = [
    "PricePoint",
    "RollingHistory",
    "OracleConfig",
    "OracleParams",
]
