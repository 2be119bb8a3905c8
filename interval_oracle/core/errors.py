"""Exception types for the regular-interval oracle.

Every mutating entry point on ``RegularIntervalOracle`` raises one of these
(and nothing else) when a guard fails. A raised error means nothing was
committed for that call.
"""

from __future__ import annotations


class OracleError(Exception):
    """Base class for oracle guard failures."""


class AuthorizationError(OracleError):
    """Raised when the caller is not the authorized principal."""

    def __init__(self, caller: str) -> None:
        self.caller = caller
        super().__init__(f"caller is not the authorized principal: {caller!r}")


class RangeError(OracleError):
    """Raised for out-of-range timestamps, decay factors, or window lengths."""


class NotDueError(OracleError):
    """Raised when an advance is attempted before the next bucket is due."""

    def __init__(self, due_at: int, now: int) -> None:
        self.due_at = due_at
        self.now = now
        super().__init__(f"next bucket not due until {due_at} (now={now})")


class FeedResolutionError(OracleError):
    """Raised when no feed round satisfies the lookup, or the walk is too long."""


class SequenceError(OracleError):
    """Raised when an append would leave a gap or rewrite a committed bucket."""

    def __init__(self, expected: int, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"append out of sequence: expected bucket {expected}, got {got}")
