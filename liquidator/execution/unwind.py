"""Unwinding LP positions into their underlying assets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from liquidator.constants import DEADLINE_WINDOW
from liquidator.models.types import normalize_address

if TYPE_CHECKING:
    from liquidator.execution.swap import SwapExecutor
    from liquidator.interfaces import Environment, ExchangeRouter
    from liquidator.routing.resolver import PathResolver

logger = structlog.get_logger()


@dataclass(frozen=True)
class UnwindResult:
    """What one position turned into.

    Attributes:
        position: LP pair address
        liquidity: LP tokens burned
        amounts: Underlying amounts released, in the pair's (token0, token1) order
        outputs: Amount of the output asset delivered per underlying asset,
            or None when the underlying assets were forwarded as-is
    """

    position: str
    liquidity: int
    amounts: tuple[int, int]
    outputs: tuple[int, int] | None = None


class LiquidityUnwinder:
    """Removes an LP position and converts the proceeds.

    Without an output asset the underlying assets go straight to the
    recipient. With one, both are routed and swapped into it.
    """

    def __init__(
        self,
        account: str,
        environment: Environment,
        router: ExchangeRouter,
        resolver: PathResolver,
        executor: SwapExecutor,
    ) -> None:
        self._account = account
        self._env = environment
        self._router = router
        self._resolver = resolver
        self._executor = executor

    def unwind(self, position: str, output_asset: str | None, recipient: str) -> UnwindResult:
        """Unwind one LP position held by the account.

        Raises:
            ExternalCallFailure: If removal, approval or a swap is rejected
            RouteNotFoundError: If an underlying asset cannot reach output_asset
        """
        pair = self._env.pair(position)
        token0, token1 = pair.underlying_assets()
        liquidity = pair.balance_of(self._account)

        to = self._account if output_asset is not None else recipient
        pair.approve(self._router.address, liquidity, sender=self._account)
        # No minimums: the two assets are not valued against each other here
        amounts = self._router.remove_liquidity(
            token0,
            token1,
            liquidity,
            0,
            0,
            to,
            self._env.now() + DEADLINE_WINDOW,
            sender=self._account,
        )
        logger.debug(
            "position_removed",
            position=pair.address[-8:],
            liquidity=liquidity,
            amount0=amounts[0],
            amount1=amounts[1],
            split_only=output_asset is None,
        )

        if output_asset is None:
            return UnwindResult(position=pair.address, liquidity=liquidity, amounts=amounts)

        outputs = (
            self._convert(token0, output_asset, recipient),
            self._convert(token1, output_asset, recipient),
        )
        return UnwindResult(
            position=pair.address, liquidity=liquidity, amounts=amounts, outputs=outputs
        )

    def _convert(self, asset: str, output_asset: str, recipient: str) -> int:
        """Send the account's whole balance of asset to recipient as output_asset."""
        if normalize_address(asset) == normalize_address(output_asset):
            return self._executor.forward(asset, recipient)

        route = self._resolver.resolve(asset, output_asset)
        amount_in = self._env.asset(asset).balance_of(self._account)
        return self._executor.execute(amount_in, route, recipient)


__all__ = ["LiquidityUnwinder", "UnwindResult"]
