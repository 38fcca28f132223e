"""Wiring of a fee manager onto an in-process chain."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import structlog

from liquidator.chain import Chain, Erc20Token, LiquidityPair, PairRegistry, SimulatedRouter
from liquidator.config import LiquidatorSettings
from liquidator.manager import FeeManager

logger = structlog.get_logger()


@dataclass
class Deployment:
    """A chain with its exchange and one fee manager deployed on it."""

    chain: Chain
    registry: PairRegistry
    router: SimulatedRouter
    manager: FeeManager


def deploy(settings: LiquidatorSettings | None = None, chain: Chain | None = None) -> Deployment:
    """Deploy registry, router and fee manager.

    Args:
        settings: Manager address, owner and initial configuration.
            Defaults to LiquidatorSettings().
        chain: Chain to deploy onto; a fresh one if None
    """
    settings = settings or LiquidatorSettings()
    chain = chain or Chain()
    registry = PairRegistry(chain)
    router = SimulatedRouter(chain, registry)
    manager = FeeManager(
        settings.manager_address,
        chain,
        registry,
        router,
        settings.manager_config(),
    )
    logger.info(
        "fee_manager_deployed",
        manager=manager.address[-8:],
        owner=manager.owner[-8:],
        router=router.address[-8:],
        slippage_bps=manager.config.slippage_bps,
        intermediates=len(manager.config.intermediate_assets),
    )
    return Deployment(chain=chain, registry=registry, router=router, manager=manager)


def provide_liquidity(
    deployment: Deployment,
    token_a: Erc20Token,
    token_b: Erc20Token,
    amount_a: int,
    amount_b: int,
    provider: str,
) -> LiquidityPair:
    """Mint fresh tokens to provider and deposit them into the (a, b) pair.

    Creates the pair if it does not exist yet.

    Returns:
        The pair; provider holds the minted LP tokens
    """
    pair = deployment.registry.get_pair(token_a.address, token_b.address)
    if pair is None:
        pair = deployment.registry.create_pair(token_a.address, token_b.address)
    token_a.mint(provider, amount_a)
    token_b.mint(provider, amount_b)
    token_a.transfer(pair.address, amount_a, sender=provider)
    token_b.transfer(pair.address, amount_b, sender=provider)
    pair.mint_liquidity(provider)
    return pair


@lru_cache(maxsize=1)
def get_default_deployment() -> Deployment:
    """Process-wide deployment configured from LIQUIDATOR_* environment variables."""
    return deploy(LiquidatorSettings.from_env())


__all__ = ["Deployment", "deploy", "provide_liquidity", "get_default_deployment"]
