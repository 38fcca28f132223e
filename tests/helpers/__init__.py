"""Test helpers module for shared test utilities.

- constants: Account and synthetic token addresses
- factories: Seeded deployments (make_market)
"""

from tests.helpers.constants import (
    LP_PROVIDER,
    MANAGER,
    OWNER,
    RECIPIENT,
    STRANGER,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_E,
    ZERO_ADDRESS,
)
from tests.helpers.factories import DEFAULT_POOLS, Market, make_market

__all__ = [
    # Constants
    "OWNER",
    "MANAGER",
    "RECIPIENT",
    "LP_PROVIDER",
    "STRANGER",
    "ZERO_ADDRESS",
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "TOKEN_E",
    # Factories
    "Market",
    "make_market",
    "DEFAULT_POOLS",
]
