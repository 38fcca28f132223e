"""Tests for LiquidityUnwinder."""

import pytest

from liquidator.config import ConfigurationStore, ManagerConfig
from liquidator.constants import DEADLINE_WINDOW
from liquidator.errors import RouteNotFoundError
from liquidator.execution import LiquidityUnwinder, SwapExecutor, UnwindResult
from liquidator.routing import PathResolver
from tests.helpers import MANAGER, OWNER, RECIPIENT, Market
from tests.helpers.mocks import CountingProxy, SpyRouter


class Harness:
    """Unwinder wired to spies around a seeded market."""

    def __init__(self, market: Market, intermediates: list[str] | None = None) -> None:
        self.market = market
        self.store = ConfigurationStore(
            ManagerConfig(
                owner=OWNER,
                intermediate_assets=tuple(market.address(s) for s in intermediates or []),
            )
        )
        self.router = SpyRouter(market.deployment.router)
        self.resolver = CountingProxy(PathResolver(market.deployment.registry, self.store))
        self.executor = CountingProxy(
            SwapExecutor(MANAGER, market.chain, self.router, self.store)
        )
        self.unwinder = LiquidityUnwinder(
            MANAGER, market.chain, self.router, self.resolver, self.executor
        )


class TestSplitOnly:
    """No output asset: underlying assets go to the recipient unconverted."""

    def test_underlying_assets_delivered_to_recipient(self, market: Market) -> None:
        harness = Harness(market)
        pair = market.pair("WETH", "USDC")
        liquidity = market.give_position(pair)

        result = harness.unwinder.unwind(pair.address, None, RECIPIENT)

        assert result.liquidity == liquidity
        assert result.outputs is None
        amounts = dict(zip(pair.underlying_assets(), result.amounts))
        assert market.tokens["WETH"].balance_of(RECIPIENT) == amounts[market.address("WETH")]
        assert market.tokens["USDC"].balance_of(RECIPIENT) == amounts[market.address("USDC")]
        assert pair.balance_of(MANAGER) == 0
        # Nothing is left behind on the manager
        assert market.balances(MANAGER) == {symbol: 0 for symbol in market.tokens}

    def test_resolver_and_executor_are_never_called(self, market: Market) -> None:
        harness = Harness(market, intermediates=["WETH"])
        pair = market.pair("UNI", "GNO")
        market.give_position(pair)

        harness.unwinder.unwind(pair.address, None, RECIPIENT)

        assert harness.resolver.call_count == 0
        assert harness.executor.call_count == 0
        assert [name for name, _, _ in harness.router.calls] == ["remove_liquidity"]

    def test_withdraw_uses_zero_minimums_and_deadline(self, market: Market) -> None:
        harness = Harness(market)
        pair = market.pair("DAI", "USDC")
        liquidity = market.give_position(pair)

        harness.unwinder.unwind(pair.address, None, RECIPIENT)

        (args, kwargs) = harness.router.method_calls("remove_liquidity")[0]
        token_a, token_b, amount, min_a, min_b, to, deadline = args
        assert (token_a, token_b) == pair.underlying_assets()
        assert amount == liquidity
        assert (min_a, min_b) == (0, 0)
        assert to == RECIPIENT
        assert deadline == market.chain.now() + DEADLINE_WINDOW
        assert kwargs == {"sender": MANAGER}


class TestWithOutputAsset:
    def test_both_sides_converted_through_direct_pools(self, market: Market) -> None:
        harness = Harness(market)
        pair = market.pair("WETH", "DAI")
        market.give_position(pair)

        result = harness.unwinder.unwind(pair.address, market.address("USDC"), RECIPIENT)

        assert isinstance(result, UnwindResult)
        assert result.outputs is not None
        assert all(out > 0 for out in result.outputs)
        assert market.tokens["USDC"].balance_of(RECIPIENT) == sum(result.outputs)
        assert market.balances(MANAGER) == {symbol: 0 for symbol in market.tokens}

    def test_withdraw_goes_to_manager_before_swaps(self, market: Market) -> None:
        harness = Harness(market)
        pair = market.pair("WETH", "DAI")
        market.give_position(pair)

        harness.unwinder.unwind(pair.address, market.address("USDC"), RECIPIENT)

        (args, _) = harness.router.method_calls("remove_liquidity")[0]
        assert args[5] == MANAGER
        names = [name for name, _, _ in harness.router.calls]
        assert names[0] == "remove_liquidity"
        assert names.count("swap_exact_tokens_for_tokens") == 2

    def test_side_equal_to_output_is_forwarded_without_swap(self, market: Market) -> None:
        harness = Harness(market)
        pair = market.pair("WETH", "USDC")
        market.give_position(pair)

        result = harness.unwinder.unwind(pair.address, market.address("USDC"), RECIPIENT)

        assert len(harness.router.method_calls("swap_exact_tokens_for_tokens")) == 1
        (args, _) = harness.router.method_calls("swap_exact_tokens_for_tokens")[0]
        assert args[2] == [market.address("WETH"), market.address("USDC")]

        amounts = dict(zip(pair.underlying_assets(), result.amounts))
        outputs = dict(zip(pair.underlying_assets(), result.outputs))
        # The USDC side arrives untouched
        assert outputs[market.address("USDC")] == amounts[market.address("USDC")]

    def test_side_without_direct_pool_uses_intermediate(self, market: Market) -> None:
        harness = Harness(market, intermediates=["WETH"])
        pair = market.pair("GNO", "DAI")
        market.give_position(pair)

        harness.unwinder.unwind(pair.address, market.address("USDC"), RECIPIENT)

        paths = [args[2] for args, _ in harness.router.method_calls("swap_exact_tokens_for_tokens")]
        assert [market.address("GNO"), market.address("WETH"), market.address("USDC")] in paths
        assert [market.address("DAI"), market.address("USDC")] in paths

    def test_unroutable_side_raises(self, market: Market) -> None:
        harness = Harness(market)
        pair = market.pair("UNI", "GNO")
        market.give_position(pair)

        with pytest.raises(RouteNotFoundError):
            harness.unwinder.unwind(pair.address, market.address("USDC"), RECIPIENT)

        assert harness.router.method_calls("get_amounts_out") == []
        assert harness.router.method_calls("swap_exact_tokens_for_tokens") == []
