"""AMM math used by the simulated exchange."""

from liquidator.amm.uniswap_v2 import UniswapV2, fee_multiplier, uniswap_v2

__all__ = ["UniswapV2", "fee_multiplier", "uniswap_v2"]
