"""UniswapV2-style liquidity pair contracts.

A pair is itself an ERC20 (the LP token) and holds balances of its two
underlying tokens. Stored reserves lag balances until `sync`, which is how
`burn` and `swap` detect what was sent to the pair.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from liquidator.amm.uniswap_v2 import uniswap_v2
from liquidator.chain.tokens import Erc20Token
from liquidator.constants import DEFAULT_POOL_FEE_BPS, MINIMUM_LIQUIDITY, ZERO_ADDRESS
from liquidator.errors import ExternalCallFailure
from liquidator.models.types import normalize_address

if TYPE_CHECKING:
    from liquidator.chain.chain import Chain

logger = structlog.get_logger()


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Order two tokens by address, as pair contracts store them.

    Raises:
        ExternalCallFailure: If the tokens are identical
    """
    token_a = normalize_address(token_a)
    token_b = normalize_address(token_b)
    if token_a == token_b:
        raise ExternalCallFailure("IDENTICAL_ADDRESSES", token_a)
    return (token_a, token_b) if token_a < token_b else (token_b, token_a)


class LiquidityPair(Erc20Token):
    """LP token and reserve holder for one token pair.

    Attributes:
        token0: Lower-sorted underlying token
        token1: Higher-sorted underlying token
        fee_bps: Swap fee in basis points (30 = 0.3%)
    """

    def __init__(
        self,
        chain: Chain,
        address: str,
        token_a: str,
        token_b: str,
        fee_bps: int = DEFAULT_POOL_FEE_BPS,
    ) -> None:
        self.token0, self.token1 = sort_tokens(token_a, token_b)
        super().__init__(chain, address, symbol=f"LP-{self.token0[-4:]}-{self.token1[-4:]}")
        self.fee_bps = fee_bps

    def underlying_assets(self) -> tuple[str, str]:
        return self.token0, self.token1

    def get_reserves(self) -> tuple[int, int]:
        return self._ledger.reserves(self.address)

    def _balances(self) -> tuple[int, int]:
        return (
            self._ledger.balance_of(self.token0, self.address),
            self._ledger.balance_of(self.token1, self.address),
        )

    def sync(self) -> None:
        """Set stored reserves to current balances."""
        balance0, balance1 = self._balances()
        self._ledger.set_reserves(self.address, balance0, balance1)

    def mint_liquidity(self, to: str) -> int:
        """Mint LP tokens for whatever was sent to the pair since the last sync.

        Returns:
            LP tokens minted to `to`

        Raises:
            ExternalCallFailure: If the deposit mints no liquidity
        """
        reserve0, reserve1 = self.get_reserves()
        balance0, balance1 = self._balances()
        amount0 = balance0 - reserve0
        amount1 = balance1 - reserve1
        supply = self.total_supply()

        liquidity = uniswap_v2.liquidity_minted(amount0, amount1, reserve0, reserve1, supply)
        if liquidity <= 0:
            raise ExternalCallFailure("INSUFFICIENT_LIQUIDITY_MINTED", self.address)
        if supply == 0:
            self._ledger.mint(self.address, ZERO_ADDRESS, MINIMUM_LIQUIDITY)
        self._ledger.mint(self.address, normalize_address(to), liquidity)
        self.sync()
        return liquidity

    def burn(self, to: str) -> tuple[int, int]:
        """Burn the LP tokens held by the pair itself and pay out both tokens.

        Returns:
            (amount0, amount1) sent to `to`

        Raises:
            ExternalCallFailure: If the burn would release nothing
        """
        balance0, balance1 = self._balances()
        liquidity = self.balance_of(self.address)
        amount0, amount1 = uniswap_v2.amounts_for_burn(
            liquidity, balance0, balance1, self.total_supply()
        )
        if amount0 <= 0 or amount1 <= 0:
            raise ExternalCallFailure("INSUFFICIENT_LIQUIDITY_BURNED", self.address)

        self._ledger.burn(self.address, self.address, liquidity)
        to = normalize_address(to)
        self._ledger.move(self.token0, self.address, to, amount0)
        self._ledger.move(self.token1, self.address, to, amount1)
        self.sync()
        logger.debug(
            "pair_burn",
            pair=self.address[-8:],
            liquidity=liquidity,
            amount0=amount0,
            amount1=amount1,
        )
        return amount0, amount1

    def swap(self, amount0_out: int, amount1_out: int, to: str) -> None:
        """Pay out token amounts, requiring the input to be sent beforehand.

        Raises:
            ExternalCallFailure: On empty output, drained reserves or a broken invariant
        """
        if amount0_out <= 0 and amount1_out <= 0:
            raise ExternalCallFailure("INSUFFICIENT_OUTPUT_AMOUNT", self.address)
        reserve0, reserve1 = self.get_reserves()
        if amount0_out >= reserve0 or amount1_out >= reserve1:
            raise ExternalCallFailure("INSUFFICIENT_LIQUIDITY", self.address)

        to = normalize_address(to)
        if to in (self.token0, self.token1):
            raise ExternalCallFailure("INVALID_TO", to)
        if amount0_out > 0:
            self._ledger.move(self.token0, self.address, to, amount0_out)
        if amount1_out > 0:
            self._ledger.move(self.token1, self.address, to, amount1_out)

        balance0, balance1 = self._balances()
        amount0_in = max(balance0 - (reserve0 - amount0_out), 0)
        amount1_in = max(balance1 - (reserve1 - amount1_out), 0)
        if amount0_in <= 0 and amount1_in <= 0:
            raise ExternalCallFailure("INSUFFICIENT_INPUT_AMOUNT", self.address)
        if not uniswap_v2.satisfies_invariant(
            balance0, balance1, amount0_in, amount1_in, reserve0, reserve1, self.fee_bps
        ):
            raise ExternalCallFailure("K", self.address)
        self.sync()


__all__ = ["LiquidityPair", "sort_tokens"]
