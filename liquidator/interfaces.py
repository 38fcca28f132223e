"""Protocols for the collaborators the fee manager calls into.

The manager never inspects pools, reserves or ledgers directly. Everything
it needs goes through these interfaces, which lets the same controller run
against the in-process chain (liquidator.chain) or against test doubles.

Calls that move funds take the acting account as a keyword-only `sender`,
standing in for the message sender of an on-chain call.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from liquidator.events import Event


class PoolRegistry(Protocol):
    """Pair discovery: which AMM pools exist."""

    def get_pool(self, token_a: str, token_b: str) -> str | None:
        """Return the pool address for a pair (order independent), or None."""
        ...


class AssetContract(Protocol):
    """Fungible asset held by accounts."""

    address: str

    def balance_of(self, holder: str) -> int: ...

    def approve(self, spender: str, amount: int, *, sender: str) -> bool: ...

    def transfer(self, to: str, amount: int, *, sender: str) -> bool: ...


class LiquidityPairContract(AssetContract, Protocol):
    """LP token of a two-asset pool."""

    token0: str
    token1: str

    def underlying_assets(self) -> tuple[str, str]: ...


class ExchangeRouter(Protocol):
    """Exchange entry points used for unwinding and swapping."""

    address: str

    def remove_liquidity(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> tuple[int, int]:
        """Burn `liquidity` LP tokens of the (token_a, token_b) pair.

        Returns:
            Amounts of token_a and token_b sent to `to`
        """
        ...

    def get_amounts_out(self, amount_in: int, path: list[str]) -> list[int]:
        """Quote a swap along `path`; the last element is the final output."""
        ...

    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]: ...


class Environment(Protocol):
    """Execution environment: clock, atomicity, event log and contract lookup."""

    def now(self) -> int:
        """Current timestamp in seconds."""
        ...

    def atomic(self) -> AbstractContextManager[None]:
        """Run a block so that any exception rolls back all of its effects."""
        ...

    def emit(self, event: Event) -> None: ...

    def asset(self, address: str) -> AssetContract: ...

    def pair(self, address: str) -> LiquidityPairContract: ...

    def native_balance_of(self, holder: str) -> int: ...

    def transfer_native(self, sender: str, to: str, amount: int) -> None: ...


__all__ = [
    "PoolRegistry",
    "AssetContract",
    "LiquidityPairContract",
    "ExchangeRouter",
    "Environment",
]
