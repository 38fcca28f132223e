"""Pair registry: which pools exist on the simulated exchange.

PairRegistry is the factory side of the exchange. It creates pair
contracts, stores them under an order-independent key and answers the
`get_pool` existence query the route resolver relies on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from liquidator.chain.pairs import LiquidityPair, sort_tokens
from liquidator.constants import DEFAULT_POOL_FEE_BPS
from liquidator.errors import ExternalCallFailure
from liquidator.models.types import normalize_address

if TYPE_CHECKING:
    from liquidator.chain.chain import Chain

logger = structlog.get_logger()


class PairRegistry:
    """Registry of liquidity pairs keyed by their unordered token pair."""

    def __init__(self, chain: Chain) -> None:
        self._chain = chain
        self._pairs: dict[frozenset[str], LiquidityPair] = {}

    def __len__(self) -> int:
        return len(self._pairs)

    @property
    def pairs(self) -> list[LiquidityPair]:
        return list(self._pairs.values())

    def create_pair(
        self,
        token_a: str,
        token_b: str,
        *,
        address: str | None = None,
        fee_bps: int = DEFAULT_POOL_FEE_BPS,
    ) -> LiquidityPair:
        """Deploy a pair for two tokens.

        Args:
            token_a: First token address (any case)
            token_b: Second token address (any case)
            address: Pair address; derived from the chain's counter if None
            fee_bps: Swap fee in basis points

        Raises:
            ExternalCallFailure: If the tokens are identical or the pair exists
        """
        token0, token1 = sort_tokens(token_a, token_b)
        pair_key = frozenset([token0, token1])
        if pair_key in self._pairs:
            raise ExternalCallFailure("PAIR_EXISTS", f"{token0}/{token1}")

        pair = LiquidityPair(
            self._chain,
            address or self._chain.next_address(),
            token0,
            token1,
            fee_bps=fee_bps,
        )
        self._chain.register(pair)
        self._pairs[pair_key] = pair
        logger.debug(
            "pair_created",
            pair=pair.address[-8:],
            token0=token0[-8:],
            token1=token1[-8:],
        )
        return pair

    def get_pair(self, token_a: str, token_b: str) -> LiquidityPair | None:
        """Get the pair for a token pair (order independent)."""
        pair_key = frozenset([normalize_address(token_a), normalize_address(token_b)])
        return self._pairs.get(pair_key)

    def get_pool(self, token_a: str, token_b: str) -> str | None:
        """Return the pair address for a token pair, or None if no pool exists."""
        pair = self.get_pair(token_a, token_b)
        return pair.address if pair is not None else None


__all__ = ["PairRegistry"]
