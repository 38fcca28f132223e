"""Swap execution with a slippage-bounded minimum output.

The order of operations is fixed: quote the route, derive the floor from
the quote and the configured tolerance, approve, then swap with the floor
and a deadline. A swap that would return less than the floor is rejected
by the exchange and the failure propagates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from liquidator.constants import DEADLINE_WINDOW, SLIPPAGE_SCALE
from liquidator.safe_int import S

if TYPE_CHECKING:
    from liquidator.config import ConfigurationStore
    from liquidator.interfaces import Environment, ExchangeRouter
    from liquidator.routing.types import SwapRoute

logger = structlog.get_logger()


def compute_min_out(expected_out: int, slippage_bps: int) -> int:
    """Minimum acceptable output: floor(expected_out * slippage_bps / 1000).

    slippage_bps = 1000 requires the full quote, 0 accepts anything.
    """
    return S(expected_out).mul_div(slippage_bps, SLIPPAGE_SCALE).value


class SwapExecutor:
    """Executes swaps and same-asset forwards on behalf of one account.

    Args:
        account: Address holding the assets (the fee manager)
        environment: Clock and contract lookup
        router: Exchange router quoting and executing swaps
        config: Configuration store; slippage is read on every swap
    """

    def __init__(
        self,
        account: str,
        environment: Environment,
        router: ExchangeRouter,
        config: ConfigurationStore,
    ) -> None:
        self._account = account
        self._env = environment
        self._router = router
        self._config = config

    def forward(self, asset: str, recipient: str) -> int:
        """Transfer the account's full balance of asset to recipient without swapping.

        Returns:
            Amount transferred
        """
        token = self._env.asset(asset)
        amount = token.balance_of(self._account)
        token.transfer(recipient, amount, sender=self._account)
        logger.debug("asset_forwarded", asset=asset[-8:], recipient=recipient[-8:], amount=amount)
        return amount

    def execute(self, amount_in: int, route: SwapRoute, recipient: str) -> int:
        """Swap amount_in of the route's source asset into its dest asset.

        Args:
            amount_in: Amount of route.source to sell
            route: Direct or single-hop route
            recipient: Address receiving the output

        Returns:
            Output amount delivered to recipient

        Raises:
            ExternalCallFailure: If quoting, approval or the swap is rejected
        """
        path = route.path
        quote = self._router.get_amounts_out(amount_in, path)
        expected_out = quote[-1]
        slippage_bps = self._config.slippage_bps
        min_out = compute_min_out(expected_out, slippage_bps)

        self._env.asset(route.source).approve(self._router.address, amount_in, sender=self._account)
        amounts = self._router.swap_exact_tokens_for_tokens(
            amount_in,
            min_out,
            path,
            recipient,
            self._env.now() + DEADLINE_WINDOW,
            sender=self._account,
        )

        logger.debug(
            "swap_executed",
            source=route.source[-8:],
            dest=route.dest[-8:],
            hops=route.hops,
            amount_in=amount_in,
            expected_out=expected_out,
            min_out=min_out,
            amount_out=amounts[-1],
        )
        return amounts[-1]


__all__ = ["SwapExecutor", "compute_min_out"]
