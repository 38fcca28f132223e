"""UniswapV2 constant product math.

UniswapV2 uses the constant product formula: x * y = k
with a fee taken from the input amount (0.3% on the canonical deployment).

This is the exchange's math. The fee manager never calls it directly; it
asks the router for a quote and trusts the answer.
"""

from __future__ import annotations

from math import isqrt

from liquidator.constants import MINIMUM_LIQUIDITY
from liquidator.safe_int import S


def fee_multiplier(fee_bps: int) -> int:
    """Fee multiplier for AMM math (10000 - fee_bps).

    For 30 bps (0.3%), this returns 9970.
    """
    return 10000 - fee_bps


class UniswapV2:
    """UniswapV2 pair math.

    Formula: amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)
    """

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee_multiplier: int = 9970,
    ) -> int:
        """Calculate output amount using constant product formula.

        Formula: amount_out = (in * fee * res_out) / (res_in * 10000 + in * fee)

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool
            fee_multiplier: Fee multiplier (default 9970 for 0.3% fee)

        Returns:
            Output token amount (0 for empty input or reserves)
        """
        if amount_in <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            return 0

        amount_in_with_fee = S(amount_in) * S(fee_multiplier)
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(10000) + amount_in_with_fee

        return (numerator // denominator).value

    def liquidity_minted(
        self,
        amount0: int,
        amount1: int,
        reserve0: int,
        reserve1: int,
        total_supply: int,
    ) -> int:
        """LP tokens minted for a deposit of (amount0, amount1).

        The first deposit mints sqrt(amount0 * amount1) minus the permanently
        locked MINIMUM_LIQUIDITY; later deposits mint pro rata to the scarcer side.

        Returns:
            Liquidity to mint for the depositor (0 if the deposit is too small)
        """
        if total_supply == 0:
            liquidity = isqrt(amount0 * amount1) - MINIMUM_LIQUIDITY
            return max(liquidity, 0)
        if reserve0 <= 0 or reserve1 <= 0:
            return 0
        return (
            S(amount0)
            .mul_div(total_supply, reserve0)
            .min(S(amount1).mul_div(total_supply, reserve1))
            .value
        )

    def amounts_for_burn(
        self,
        liquidity: int,
        balance0: int,
        balance1: int,
        total_supply: int,
    ) -> tuple[int, int]:
        """Underlying amounts released by burning `liquidity` LP tokens."""
        if total_supply <= 0:
            return 0, 0
        amount0 = S(liquidity).mul_div(balance0, total_supply).value
        amount1 = S(liquidity).mul_div(balance1, total_supply).value
        return amount0, amount1

    def satisfies_invariant(
        self,
        balance0: int,
        balance1: int,
        amount0_in: int,
        amount1_in: int,
        reserve0: int,
        reserve1: int,
        fee_bps: int,
    ) -> bool:
        """Check the fee-adjusted constant product after a swap.

        (b0 * 10000 - in0 * fee) * (b1 * 10000 - in1 * fee) >= r0 * r1 * 10000^2
        """
        adjusted0 = S(balance0) * S(10000) - S(amount0_in) * S(fee_bps)
        adjusted1 = S(balance1) * S(10000) - S(amount1_in) * S(fee_bps)
        return adjusted0 * adjusted1 >= S(reserve0) * S(reserve1) * S(10000**2)


# Singleton instance
uniswap_v2 = UniswapV2()
