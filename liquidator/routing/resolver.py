"""Path resolution for fee liquidation swaps.

PathResolver picks the route an asset takes to the output asset:
1. A direct pool, if the registry has one.
2. Otherwise the first configured intermediate asset m (in configured
   order) with pools for both (source, m) and (m, dest).
3. Otherwise no route.

There is no price comparison between candidates: the first intermediate
that connects wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from liquidator.errors import RouteNotFoundError
from liquidator.models.types import normalize_address
from liquidator.routing.types import DirectRoute, SingleHopRoute, SwapRoute

if TYPE_CHECKING:
    from liquidator.config import ConfigurationStore
    from liquidator.interfaces import PoolRegistry

logger = structlog.get_logger()


class PathResolver:
    """Resolve swap routes against a pool registry and the configured intermediates.

    Args:
        registry: Pool existence oracle
        config: Configuration store; the intermediate list is read on every call
            so replacements take effect immediately
    """

    def __init__(self, registry: PoolRegistry, config: ConfigurationStore) -> None:
        self._registry = registry
        self._config = config

    def _has_pool(self, token_a: str, token_b: str) -> bool:
        return self._registry.get_pool(token_a, token_b) is not None

    def find_route(self, source: str, dest: str) -> SwapRoute | None:
        """Find a route from source to dest.

        Args:
            source: Asset to sell
            dest: Asset to receive (must differ from source)

        Returns:
            DirectRoute, SingleHopRoute, or None if the assets are not connected

        Raises:
            ValueError: If source and dest are the same asset
        """
        source = normalize_address(source)
        dest = normalize_address(dest)
        if source == dest:
            raise ValueError(f"No route needed from an asset to itself: {source}")

        if self._has_pool(source, dest):
            return DirectRoute(source=source, dest=dest)

        for intermediate in self._config.intermediate_assets:
            if intermediate in (source, dest):
                continue
            if self._has_pool(source, intermediate) and self._has_pool(intermediate, dest):
                return SingleHopRoute(source=source, intermediate=intermediate, dest=dest)

        return None

    def resolve(self, source: str, dest: str) -> SwapRoute:
        """Find a route from source to dest or fail.

        Raises:
            RouteNotFoundError: If no direct pool or configured intermediate connects them
        """
        route = self.find_route(source, dest)
        if route is None:
            logger.debug(
                "route_not_found",
                source=source[-8:],
                dest=dest[-8:],
                intermediates=len(self._config.intermediate_assets),
            )
            raise RouteNotFoundError(normalize_address(source), normalize_address(dest))

        logger.debug(
            "route_resolved",
            source=source[-8:],
            dest=dest[-8:],
            hops=route.hops,
        )
        return route


__all__ = ["PathResolver"]
