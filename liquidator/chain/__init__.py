"""In-process execution environment for the fee manager.

Provides the collaborators the manager calls into (assets, LP pairs, pair
registry, router) on top of a ledger with whole-call atomicity.
"""

from .chain import GENESIS_TIMESTAMP, Chain
from .encoding import Interaction, encode_remove_liquidity, encode_swap_exact_tokens_for_tokens
from .ledger import Ledger, LedgerSnapshot
from .pairs import LiquidityPair, sort_tokens
from .registry import PairRegistry
from .router import SimulatedRouter
from .tokens import Erc20Token

__all__ = [
    "Chain",
    "GENESIS_TIMESTAMP",
    "Ledger",
    "LedgerSnapshot",
    "Erc20Token",
    "LiquidityPair",
    "sort_tokens",
    "PairRegistry",
    "SimulatedRouter",
    "Interaction",
    "encode_remove_liquidity",
    "encode_swap_exact_tokens_for_tokens",
]
