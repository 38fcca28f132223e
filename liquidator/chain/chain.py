"""In-process execution environment.

Chain bundles everything the fee manager treats as "outside": the ledger,
the contract directory, a clock, the event log and the router interaction
log. It provides whole-call atomicity: effects inside `atomic()` are kept
only if the block exits normally.

Usage:
    chain = Chain()
    weth = chain.create_token("WETH")
    usdc = chain.create_token("USDC")
    registry = PairRegistry(chain)
    pair = registry.create_pair(weth.address, usdc.address)

    with chain.atomic():
        ...  # any exception restores the state at block entry
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

from liquidator.chain.ledger import Ledger
from liquidator.chain.pairs import LiquidityPair
from liquidator.chain.tokens import Erc20Token
from liquidator.errors import ExternalCallFailure
from liquidator.models.types import normalize_address

if TYPE_CHECKING:
    from liquidator.chain.encoding import Interaction
    from liquidator.events import Event

logger = structlog.get_logger()

# Genesis timestamp for new chains (2024-01-01T00:00:00Z)
GENESIS_TIMESTAMP = 1_704_067_200


class Chain:
    """Ledger, contracts, clock and logs of one simulated chain."""

    def __init__(self, timestamp: int = GENESIS_TIMESTAMP) -> None:
        self.ledger = Ledger()
        self._timestamp = timestamp
        self._contracts: dict[str, Erc20Token] = {}
        self._events: list[Event] = []
        self._interactions: list[Interaction] = []
        self._address_counter = 0

    # --- Clock ---

    def now(self) -> int:
        return self._timestamp

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new timestamp."""
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards: {seconds}")
        self._timestamp += seconds
        return self._timestamp

    # --- Contract directory ---

    def next_address(self) -> str:
        """Allocate a fresh deterministic contract address."""
        self._address_counter += 1
        return f"0x{0xC0DE0000 + self._address_counter:040x}"

    def register(self, contract: Erc20Token) -> None:
        if contract.address in self._contracts:
            raise ExternalCallFailure("ADDRESS_IN_USE", contract.address)
        self._contracts[contract.address] = contract

    def create_token(self, symbol: str, address: str | None = None) -> Erc20Token:
        token = Erc20Token(self, address or self.next_address(), symbol)
        self.register(token)
        return token

    def asset(self, address: str) -> Erc20Token:
        """Look up a deployed token or pair.

        Raises:
            ExternalCallFailure: If nothing is deployed at address
        """
        contract = self._contracts.get(normalize_address(address))
        if contract is None:
            raise ExternalCallFailure("NO_CONTRACT", address)
        return contract

    def pair(self, address: str) -> LiquidityPair:
        """Look up a deployed liquidity pair.

        Raises:
            ExternalCallFailure: If address is not a pair
        """
        contract = self.asset(address)
        if not isinstance(contract, LiquidityPair):
            raise ExternalCallFailure("NOT_A_PAIR", address)
        return contract

    # --- Native currency ---

    def native_balance_of(self, holder: str) -> int:
        return self.ledger.native_balance_of(normalize_address(holder))

    def fund_native(self, holder: str, amount: int) -> None:
        self.ledger.credit_native(normalize_address(holder), amount)

    def transfer_native(self, sender: str, to: str, amount: int) -> None:
        self.ledger.move_native(normalize_address(sender), normalize_address(to), amount)

    # --- Logs ---

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    @property
    def interactions(self) -> list[Interaction]:
        return list(self._interactions)

    def emit(self, event: Event) -> None:
        self._events.append(event)
        logger.debug("event_emitted", event_name=event.name)

    def record_interaction(self, interaction: Interaction) -> None:
        self._interactions.append(interaction)

    # --- Atomicity ---

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Roll back ledger, events and interactions if the block raises.

        Blocks nest; an inner failure that the outer block catches only
        undoes the inner block's effects.
        """
        snapshot = self.ledger.snapshot()
        events_mark = len(self._events)
        interactions_mark = len(self._interactions)
        try:
            yield
        except BaseException:
            events_dropped = len(self._events) - events_mark
            interactions_dropped = len(self._interactions) - interactions_mark
            self.ledger.restore(snapshot)
            del self._events[events_mark:]
            del self._interactions[interactions_mark:]
            logger.debug(
                "atomic_block_reverted",
                events_dropped=events_dropped,
                interactions_dropped=interactions_dropped,
            )
            raise


__all__ = ["Chain", "GENESIS_TIMESTAMP"]
