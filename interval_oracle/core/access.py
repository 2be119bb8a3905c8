"""
Single-writer access gate.

The gate holds the one principal allowed to mutate oracle state. Callers pass
their identity explicitly on every mutating call; there is no ambient
"current caller".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import AuthorizationError

logger = logging.getLogger(__name__)


def _require_principal(value: object, *, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    if not value:
        raise ValueError(f"{name} must be non-empty")
    return value


@dataclass
class AccessGate:
    principal: str

    def __post_init__(self) -> None:
        _require_principal(self.principal, name="principal")

    def is_authorized(self, caller: str) -> bool:
        return caller == self.principal

    def authorize(self, caller: str) -> None:
        if not self.is_authorized(caller):
            logger.warning("rejected unauthorized caller %r", caller)
            raise AuthorizationError(caller)

    def update_principal(self, caller: str, new_principal: str) -> None:
        self.authorize(caller)
        _require_principal(new_principal, name="new_principal")
        logger.info("authorized principal changed from %r to %r", self.principal, new_principal)
        self.principal = new_principal
