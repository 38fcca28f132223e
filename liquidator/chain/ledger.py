"""Account ledger for the in-process chain.

Stores every piece of mutable chain state in flat dicts so a snapshot is a
shallow copy of each table:
- token balances keyed by (token, holder)
- allowances keyed by (token, owner, spender)
- total supplies keyed by token
- pair reserves keyed by pair
- native-currency balances keyed by holder
"""

from __future__ import annotations

from dataclasses import dataclass

from liquidator.errors import ExternalCallFailure
from liquidator.safe_int import S, Underflow


@dataclass(frozen=True)
class LedgerSnapshot:
    """Frozen copy of every ledger table."""

    balances: dict[tuple[str, str], int]
    allowances: dict[tuple[str, str, str], int]
    supplies: dict[str, int]
    reserves: dict[str, tuple[int, int]]
    native: dict[str, int]


class Ledger:
    """Balances, allowances, supplies and reserves of all contracts.

    Methods raise ExternalCallFailure with the revert reason an ERC20 or
    pair contract would give, so callers can propagate them unchanged.
    """

    def __init__(self) -> None:
        self._balances: dict[tuple[str, str], int] = {}
        self._allowances: dict[tuple[str, str, str], int] = {}
        self._supplies: dict[str, int] = {}
        self._reserves: dict[str, tuple[int, int]] = {}
        self._native: dict[str, int] = {}

    def snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            balances=dict(self._balances),
            allowances=dict(self._allowances),
            supplies=dict(self._supplies),
            reserves=dict(self._reserves),
            native=dict(self._native),
        )

    def restore(self, snapshot: LedgerSnapshot) -> None:
        self._balances = dict(snapshot.balances)
        self._allowances = dict(snapshot.allowances)
        self._supplies = dict(snapshot.supplies)
        self._reserves = dict(snapshot.reserves)
        self._native = dict(snapshot.native)

    # --- Token balances ---

    def balance_of(self, token: str, holder: str) -> int:
        return self._balances.get((token, holder), 0)

    def total_supply(self, token: str) -> int:
        return self._supplies.get(token, 0)

    def move(self, token: str, src: str, dst: str, amount: int) -> None:
        """Move `amount` of `token` from src to dst.

        Raises:
            ExternalCallFailure: If src holds less than amount
        """
        if amount < 0:
            raise ExternalCallFailure("NEGATIVE_AMOUNT", str(amount))
        try:
            remaining = (S(self.balance_of(token, src)) - amount).value
        except Underflow as err:
            raise ExternalCallFailure("TRANSFER_AMOUNT_EXCEEDS_BALANCE", f"token {token}") from err
        self._balances[(token, src)] = remaining
        self._balances[(token, dst)] = self.balance_of(token, dst) + amount

    def mint(self, token: str, to: str, amount: int) -> None:
        self._balances[(token, to)] = self.balance_of(token, to) + amount
        self._supplies[token] = self.total_supply(token) + amount

    def burn(self, token: str, holder: str, amount: int) -> None:
        """Destroy `amount` of `token` held by holder.

        Raises:
            ExternalCallFailure: If holder holds less than amount
        """
        try:
            remaining = (S(self.balance_of(token, holder)) - amount).value
        except Underflow as err:
            raise ExternalCallFailure("BURN_AMOUNT_EXCEEDS_BALANCE", f"token {token}") from err
        self._balances[(token, holder)] = remaining
        self._supplies[token] = self.total_supply(token) - amount

    # --- Allowances ---

    def allowance(self, token: str, owner: str, spender: str) -> int:
        return self._allowances.get((token, owner, spender), 0)

    def set_allowance(self, token: str, owner: str, spender: str, amount: int) -> None:
        self._allowances[(token, owner, spender)] = amount

    def spend_allowance(self, token: str, owner: str, spender: str, amount: int) -> None:
        """Consume part of an allowance.

        Raises:
            ExternalCallFailure: If the allowance is smaller than amount
        """
        try:
            remaining = (S(self.allowance(token, owner, spender)) - amount).value
        except Underflow as err:
            raise ExternalCallFailure("INSUFFICIENT_ALLOWANCE", f"token {token}") from err
        self._allowances[(token, owner, spender)] = remaining

    # --- Pair reserves ---

    def reserves(self, pair: str) -> tuple[int, int]:
        return self._reserves.get(pair, (0, 0))

    def set_reserves(self, pair: str, reserve0: int, reserve1: int) -> None:
        self._reserves[pair] = (reserve0, reserve1)

    # --- Native currency ---

    def native_balance_of(self, holder: str) -> int:
        return self._native.get(holder, 0)

    def credit_native(self, holder: str, amount: int) -> None:
        self._native[holder] = self.native_balance_of(holder) + amount

    def move_native(self, src: str, dst: str, amount: int) -> None:
        """Raises ExternalCallFailure if src holds less than amount."""
        try:
            remaining = (S(self.native_balance_of(src)) - amount).value
        except Underflow as err:
            raise ExternalCallFailure("INSUFFICIENT_NATIVE_BALANCE", src) from err
        self._native[src] = remaining
        self._native[dst] = self.native_balance_of(dst) + amount


__all__ = ["Ledger", "LedgerSnapshot"]
