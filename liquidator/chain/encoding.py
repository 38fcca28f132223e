"""ABI calldata encoding for UniswapV2 Router02 calls.

The simulated router records every call it accepts as an Interaction with
the calldata a real Router02 would receive, so a batch receipt shows
exactly what would be sent on-chain.
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_abi import encode  # type: ignore[attr-defined]

from liquidator.constants import REMOVE_LIQUIDITY_SELECTOR, SWAP_EXACT_TOKENS_SELECTOR
from liquidator.models.types import is_valid_address


@dataclass(frozen=True)
class Interaction:
    """An exchange call as (method, target, calldata)."""

    method: str
    target: str
    calldata: str


def _address_bytes(name: str, address: str) -> bytes:
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address}")
    return bytes.fromhex(address[2:])


def encode_remove_liquidity(
    token_a: str,
    token_b: str,
    liquidity: int,
    amount_a_min: int,
    amount_b_min: int,
    to: str,
    deadline: int,
) -> str:
    """Encode removeLiquidity(address,address,uint256,uint256,uint256,address,uint256).

    Raises:
        ValueError: If any address is invalid
    """
    encoded_args = encode(
        ["address", "address", "uint256", "uint256", "uint256", "address", "uint256"],
        [
            _address_bytes("token_a", token_a),
            _address_bytes("token_b", token_b),
            liquidity,
            amount_a_min,
            amount_b_min,
            _address_bytes("to", to),
            deadline,
        ],
    )
    return REMOVE_LIQUIDITY_SELECTOR + encoded_args.hex()


def encode_swap_exact_tokens_for_tokens(
    amount_in: int,
    amount_out_min: int,
    path: list[str],
    to: str,
    deadline: int,
) -> str:
    """Encode swapExactTokensForTokens(uint256,uint256,address[],address,uint256).

    Raises:
        ValueError: If any address is invalid
    """
    path_bytes = [_address_bytes(f"path[{i}]", addr) for i, addr in enumerate(path)]
    encoded_args = encode(
        ["uint256", "uint256", "address[]", "address", "uint256"],
        [amount_in, amount_out_min, path_bytes, _address_bytes("to", to), deadline],
    )
    return SWAP_EXACT_TOKENS_SELECTOR + encoded_args.hex()


__all__ = [
    "Interaction",
    "encode_remove_liquidity",
    "encode_swap_exact_tokens_for_tokens",
]
