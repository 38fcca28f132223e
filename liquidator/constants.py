"""Protocol constants for the fee liquidator.

Centralizes well-known addresses and execution parameters.
"""

# Sentinel for "no output asset" and for unset owners
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Slippage is expressed in thousandths of the quoted output
SLIPPAGE_SCALE = 1000

# Default tolerance: accept no less than 99% of the quote
DEFAULT_SLIPPAGE_BPS = 990

# Every exchange call carries deadline = now + DEADLINE_WINDOW (seconds)
DEADLINE_WINDOW = 600

# UniswapV2 Router02 function selectors
REMOVE_LIQUIDITY_SELECTOR = "0xbaa2abde"  # removeLiquidity
SWAP_EXACT_TOKENS_SELECTOR = "0x38ed1739"  # swapExactTokensForTokens

# Standard UniswapV2 fee (30 bps = 0.3%)
DEFAULT_POOL_FEE_BPS = 30

# Liquidity permanently locked on the first mint of a pair
MINIMUM_LIQUIDITY = 1000
