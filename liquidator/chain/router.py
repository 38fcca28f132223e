"""Simulated UniswapV2 Router02.

Implements the three router entry points the fee manager uses:
removeLiquidity, getAmountsOut and swapExactTokensForTokens, with the same
checks and revert reasons as the on-chain router. Accepted calls are
recorded on the chain's interaction log as ABI-encoded calldata.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from liquidator.amm.uniswap_v2 import fee_multiplier, uniswap_v2
from liquidator.chain.encoding import (
    Interaction,
    encode_remove_liquidity,
    encode_swap_exact_tokens_for_tokens,
)
from liquidator.chain.pairs import sort_tokens
from liquidator.errors import ExternalCallFailure
from liquidator.models.types import normalize_address

if TYPE_CHECKING:
    from liquidator.chain.chain import Chain
    from liquidator.chain.pairs import LiquidityPair
    from liquidator.chain.registry import PairRegistry

logger = structlog.get_logger()


class SimulatedRouter:
    """Router over the pairs of one PairRegistry.

    Attributes:
        address: Router address (the spender LP and input tokens are approved for)
    """

    def __init__(self, chain: Chain, registry: PairRegistry, address: str | None = None) -> None:
        self._chain = chain
        self._registry = registry
        self.address = normalize_address(address or chain.next_address(), validate=True)

    def _ensure(self, deadline: int) -> None:
        if deadline < self._chain.now():
            raise ExternalCallFailure("EXPIRED", f"deadline {deadline} < now {self._chain.now()}")

    def _require_pair(self, token_a: str, token_b: str) -> LiquidityPair:
        pair = self._registry.get_pair(token_a, token_b)
        if pair is None:
            raise ExternalCallFailure("PAIR_NOT_FOUND", f"{token_a}/{token_b}")
        return pair

    def _record(self, method: str, calldata: str) -> None:
        self._chain.record_interaction(Interaction(method=method, target=self.address, calldata=calldata))

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
        """Burn `liquidity` LP tokens pulled from sender and send both tokens to `to`.

        Returns:
            (amount_a, amount_b) in the caller's token order

        Raises:
            ExternalCallFailure: EXPIRED, PAIR_NOT_FOUND, INSUFFICIENT_ALLOWANCE,
                INSUFFICIENT_LIQUIDITY_BURNED, INSUFFICIENT_A_AMOUNT, INSUFFICIENT_B_AMOUNT
        """
        self._ensure(deadline)
        token_a = normalize_address(token_a)
        token_b = normalize_address(token_b)
        pair = self._require_pair(token_a, token_b)

        pair.transfer_from(sender, pair.address, liquidity, sender=self.address)
        amount0, amount1 = pair.burn(to)
        token0, _ = sort_tokens(token_a, token_b)
        amount_a, amount_b = (amount0, amount1) if token_a == token0 else (amount1, amount0)
        if amount_a < amount_a_min:
            raise ExternalCallFailure("INSUFFICIENT_A_AMOUNT", f"{amount_a} < {amount_a_min}")
        if amount_b < amount_b_min:
            raise ExternalCallFailure("INSUFFICIENT_B_AMOUNT", f"{amount_b} < {amount_b_min}")

        self._record(
            "removeLiquidity",
            encode_remove_liquidity(
                token_a, token_b, liquidity, amount_a_min, amount_b_min, normalize_address(to), deadline
            ),
        )
        logger.debug(
            "router_remove_liquidity",
            pair=pair.address[-8:],
            liquidity=liquidity,
            amount_a=amount_a,
            amount_b=amount_b,
        )
        return amount_a, amount_b

    def get_amounts_out(self, amount_in: int, path: list[str]) -> list[int]:
        """Quote a swap of amount_in along path.

        Returns:
            Amounts at each step; amounts[0] == amount_in, amounts[-1] is the output

        Raises:
            ExternalCallFailure: INVALID_PATH, PAIR_NOT_FOUND, INSUFFICIENT_INPUT_AMOUNT,
                INSUFFICIENT_LIQUIDITY
        """
        if len(path) < 2:
            raise ExternalCallFailure("INVALID_PATH", str(path))
        if amount_in <= 0:
            raise ExternalCallFailure("INSUFFICIENT_INPUT_AMOUNT", str(amount_in))

        amounts = [amount_in]
        for token_in, token_out in zip(path, path[1:]):
            token_in = normalize_address(token_in)
            pair = self._require_pair(token_in, token_out)
            reserve0, reserve1 = pair.get_reserves()
            reserve_in, reserve_out = (
                (reserve0, reserve1) if token_in == pair.token0 else (reserve1, reserve0)
            )
            if reserve_in <= 0 or reserve_out <= 0:
                raise ExternalCallFailure("INSUFFICIENT_LIQUIDITY", pair.address)
            amounts.append(
                uniswap_v2.get_amount_out(
                    amounts[-1], reserve_in, reserve_out, fee_multiplier(pair.fee_bps)
                )
            )
        return amounts

    def swap_exact_tokens_for_tokens(
        self,
        amount_in: int,
        amount_out_min: int,
        path: list[str],
        to: str,
        deadline: int,
        *,
        sender: str,
    ) -> list[int]:
        """Swap exactly amount_in of path[0] for at least amount_out_min of path[-1].

        Returns:
            Amounts at each step of the path

        Raises:
            ExternalCallFailure: EXPIRED, INSUFFICIENT_OUTPUT_AMOUNT, or any quoting,
                allowance or pair failure
        """
        self._ensure(deadline)
        path = [normalize_address(token) for token in path]
        amounts = self.get_amounts_out(amount_in, path)
        if amounts[-1] < amount_out_min:
            raise ExternalCallFailure(
                "INSUFFICIENT_OUTPUT_AMOUNT", f"{amounts[-1]} < {amount_out_min}"
            )

        first_pair = self._require_pair(path[0], path[1])
        self._chain.asset(path[0]).transfer_from(
            sender, first_pair.address, amounts[0], sender=self.address
        )
        for i, (token_in, token_out) in enumerate(zip(path, path[1:])):
            pair = self._require_pair(token_in, token_out)
            amount_out = amounts[i + 1]
            amount0_out, amount1_out = (
                (0, amount_out) if token_in == pair.token0 else (amount_out, 0)
            )
            if i < len(path) - 2:
                hop_to = self._require_pair(token_out, path[i + 2]).address
            else:
                hop_to = normalize_address(to)
            pair.swap(amount0_out, amount1_out, hop_to)

        self._record(
            "swapExactTokensForTokens",
            encode_swap_exact_tokens_for_tokens(
                amount_in, amount_out_min, path, normalize_address(to), deadline
            ),
        )
        logger.debug(
            "router_swap",
            path=[token[-8:] for token in path],
            amount_in=amount_in,
            amount_out=amounts[-1],
            amount_out_min=amount_out_min,
        )
        return amounts


__all__ = ["SimulatedRouter"]
