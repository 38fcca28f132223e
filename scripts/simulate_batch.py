#!/usr/bin/env python3
"""Simulate a fee liquidation batch on an in-process chain.

Seeds WETH/USDC/DAI/GNO pairs, hands LP fee positions to the fee manager and
liquidates them into USDC (GNO has no USDC pool and hops through WETH).

Usage:
    python scripts/simulate_batch.py
    python scripts/simulate_batch.py --split-only
    python scripts/simulate_batch.py --slippage 1000 --verbose
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import structlog

sys.path.insert(0, str(Path(__file__).parent.parent))

from liquidator.config import LiquidatorSettings
from liquidator.deployment import deploy, provide_liquidity
from liquidator.errors import LiquidatorError

logger = structlog.get_logger()

LP_PROVIDER = "0x00000000000000000000000000000000000000aa"
RECIPIENT = "0x00000000000000000000000000000000000000bb"


def main() -> int:
    parser = argparse.ArgumentParser(description="Simulate a fee liquidation batch")
    parser.add_argument(
        "--slippage",
        type=int,
        default=990,
        help="Slippage tolerance in thousandths of the quote (default: 990)",
    )
    parser.add_argument(
        "--split-only",
        action="store_true",
        help="Forward underlying assets without converting them",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    settings = LiquidatorSettings(slippage_bps=args.slippage)
    deployment = deploy(settings)
    chain = deployment.chain

    weth = chain.create_token("WETH")
    usdc = chain.create_token("USDC")
    dai = chain.create_token("DAI")
    gno = chain.create_token("GNO")

    weth_usdc = provide_liquidity(deployment, weth, usdc, 1_000 * 10**18, 2_500_000 * 10**6, LP_PROVIDER)
    dai_usdc = provide_liquidity(deployment, dai, usdc, 1_000_000 * 10**18, 1_000_000 * 10**6, LP_PROVIDER)
    gno_weth = provide_liquidity(deployment, gno, weth, 10_000 * 10**18, 400 * 10**18, LP_PROVIDER)

    # Fee positions: 1% of each pair's supply accrues to the manager
    positions = [weth_usdc, dai_usdc, gno_weth]
    for pair in positions:
        pair.transfer(deployment.manager.address, pair.balance_of(LP_PROVIDER) // 100, sender=LP_PROVIDER)

    owner = deployment.manager.owner
    try:
        deployment.manager.set_intermediate_assets(owner, [weth.address, dai.address])
        receipt = deployment.manager.process_batch(
            owner,
            [pair.address for pair in positions],
            None if args.split_only else usdc.address,
            RECIPIENT,
        )
    except LiquidatorError as err:
        logger.error("batch_failed", error=type(err).__name__, detail=str(err))
        return 1

    balances = {
        token.symbol: token.balance_of(RECIPIENT) for token in (weth, usdc, dai, gno)
    }
    print(
        json.dumps(
            {
                "positions": list(receipt.positions),
                "outputAsset": receipt.output_asset,
                "recipientBalances": balances,
                "interactions": [i.method for i in chain.interactions],
            },
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
