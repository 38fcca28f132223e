"""Fee liquidator error classes.

Every failure is fatal for the enclosing call: nothing in the liquidator
catches these, the execution environment rolls the call back and the
caller sees the exception.
"""

from __future__ import annotations


class LiquidatorError(Exception):
    """Base error for fee liquidator operations."""

    pass


class ConfigurationError(LiquidatorError):
    """Configuration value out of range (e.g. slippage outside [0, 1000])."""

    pass


class AuthorizationError(LiquidatorError):
    """Caller is not the administrator of a gated operation."""

    def __init__(self, caller: str, operation: str) -> None:
        super().__init__(f"caller {caller} is not the owner (operation: {operation})")
        self.caller = caller
        self.operation = operation


class RouteNotFoundError(LiquidatorError):
    """No direct pool and no configured single-hop intermediate connects two assets."""

    def __init__(self, source: str, dest: str) -> None:
        super().__init__(f"no route found from {source} to {dest}")
        self.source = source
        self.dest = dest


class ExternalCallFailure(LiquidatorError):
    """A registry, router or asset contract rejected a call.

    Attributes:
        reason: Short revert reason, e.g. "EXPIRED" or "INSUFFICIENT_OUTPUT_AMOUNT"
    """

    def __init__(self, reason: str, detail: str | None = None) -> None:
        message = reason if detail is None else f"{reason}: {detail}"
        super().__init__(message)
        self.reason = reason
        self.detail = detail


class ReentrancyError(ExternalCallFailure):
    """A locked operation was re-entered from within an external call."""

    def __init__(self, operation: str) -> None:
        super().__init__("REENTRANT_CALL", operation)
