"""ERC20-style asset contracts backed by the chain ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from liquidator.errors import ExternalCallFailure
from liquidator.models.types import normalize_address

if TYPE_CHECKING:
    from liquidator.chain.chain import Chain
    from liquidator.chain.ledger import Ledger

logger = structlog.get_logger()


class Erc20Token:
    """Fungible token whose state lives in the owning chain's ledger.

    Attributes:
        address: Token contract address (lowercase)
        symbol: Display symbol, used only in logs
    """

    def __init__(self, chain: Chain, address: str, symbol: str = "") -> None:
        self._chain = chain
        self.address = normalize_address(address, validate=True)
        self.symbol = symbol or self.address[-6:]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol}, {self.address})"

    @property
    def _ledger(self) -> Ledger:
        return self._chain.ledger

    def balance_of(self, holder: str) -> int:
        return self._ledger.balance_of(self.address, normalize_address(holder))

    def total_supply(self) -> int:
        return self._ledger.total_supply(self.address)

    def allowance(self, owner: str, spender: str) -> int:
        return self._ledger.allowance(
            self.address, normalize_address(owner), normalize_address(spender)
        )

    def approve(self, spender: str, amount: int, *, sender: str) -> bool:
        """Set sender's allowance for spender to exactly `amount`."""
        if amount < 0:
            raise ExternalCallFailure("NEGATIVE_AMOUNT", str(amount))
        self._ledger.set_allowance(
            self.address, normalize_address(sender), normalize_address(spender), amount
        )
        return True

    def transfer(self, to: str, amount: int, *, sender: str) -> bool:
        """Move `amount` from sender to `to`.

        Raises:
            ExternalCallFailure: If sender's balance is insufficient
        """
        self._ledger.move(self.address, normalize_address(sender), normalize_address(to), amount)
        logger.debug(
            "token_transfer",
            token=self.symbol,
            src=sender[-8:],
            dst=to[-8:],
            amount=amount,
        )
        return True

    def transfer_from(self, owner: str, to: str, amount: int, *, sender: str) -> bool:
        """Move `amount` from owner to `to`, spending sender's allowance.

        Raises:
            ExternalCallFailure: If the allowance or owner's balance is insufficient
        """
        owner = normalize_address(owner)
        self._ledger.spend_allowance(self.address, owner, normalize_address(sender), amount)
        return self.transfer(to, amount, sender=owner)

    def mint(self, to: str, amount: int) -> None:
        """Create new tokens (seeding helper for the simulated chain)."""
        self._ledger.mint(self.address, normalize_address(to), amount)


__all__ = ["Erc20Token"]
