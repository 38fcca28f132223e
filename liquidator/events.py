"""Event records emitted by the fee manager.

Events are appended to the execution environment's log and disappear with
it when the enclosing call is rolled back.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class Event:
    """Base class for emitted events."""

    name: ClassVar[str] = "Event"

    def to_dict(self) -> dict[str, Any]:
        """Serialize as {"event": name, **fields} for logs and API responses."""
        return {"event": self.name, **asdict(self)}


@dataclass(frozen=True)
class LiquidityTokensSwapped(Event):
    """A batch of LP positions was liquidated."""

    name: ClassVar[str] = "LiquidityTokensSwapped"

    lp_tokens: tuple[str, ...]
    output_token: str | None
    recipient: str


@dataclass(frozen=True)
class ChangedPossiblePaths(Event):
    """The intermediate-asset list was replaced."""

    name: ClassVar[str] = "ChangedPossiblePaths"

    paths: tuple[str, ...]


@dataclass(frozen=True)
class SlippageChanged(Event):
    """The slippage tolerance was replaced."""

    name: ClassVar[str] = "SlippageChanged"

    previous: int
    current: int


@dataclass(frozen=True)
class OwnershipTransferred(Event):
    name: ClassVar[str] = "OwnershipTransferred"

    previous_owner: str
    new_owner: str


@dataclass(frozen=True)
class NativeSwept(Event):
    name: ClassVar[str] = "NativeSwept"

    to: str
    amount: int


__all__ = [
    "Event",
    "LiquidityTokensSwapped",
    "ChangedPossiblePaths",
    "SlippageChanged",
    "OwnershipTransferred",
    "NativeSwept",
]
