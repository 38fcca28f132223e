"""Tests for SwapExecutor and the slippage floor."""

import pytest

from liquidator.config import ConfigurationStore, ManagerConfig
from liquidator.constants import DEADLINE_WINDOW
from liquidator.errors import ExternalCallFailure
from liquidator.execution.swap import SwapExecutor, compute_min_out
from liquidator.routing import DirectRoute, SingleHopRoute
from tests.helpers import LP_PROVIDER, MANAGER, OWNER, RECIPIENT, Market
from tests.helpers.mocks import SpyRouter


def make_executor(market: Market, slippage_bps: int = 990) -> tuple[SwapExecutor, SpyRouter]:
    spy = SpyRouter(market.deployment.router)
    store = ConfigurationStore(ManagerConfig(owner=OWNER, slippage_bps=slippage_bps))
    return SwapExecutor(MANAGER, market.chain, spy, store), spy


def fund_manager(market: Market, symbol: str, amount: int) -> None:
    market.tokens[symbol].mint(MANAGER, amount)


class TestComputeMinOut:
    """minOut = floor(expected * slippage / 1000)."""

    @pytest.mark.parametrize(
        ("expected", "slippage", "min_out"),
        [
            (1_000_000, 990, 990_000),
            (1_000_000, 1000, 1_000_000),
            (1_000_000, 0, 0),
            (999, 990, 989),  # 989.01 truncates
            (1, 999, 0),
            (123_456_789, 500, 61_728_394),  # 61728394.5 truncates
        ],
    )
    def test_floor_of_scaled_quote(self, expected: int, slippage: int, min_out: int) -> None:
        assert compute_min_out(expected, slippage) == min_out

    def test_lower_tolerance_loosens_floor(self) -> None:
        expected = 10**18
        floors = [compute_min_out(expected, s) for s in (1000, 990, 900, 500, 0)]
        assert floors == sorted(floors, reverse=True)


class TestExecute:
    def test_direct_swap_delivers_to_recipient(self, market: Market) -> None:
        executor, _ = make_executor(market)
        fund_manager(market, "WETH", 10**18)
        route = DirectRoute(source=market.address("WETH"), dest=market.address("USDC"))

        amount_out = executor.execute(10**18, route, RECIPIENT)

        assert amount_out > 0
        assert market.tokens["USDC"].balance_of(RECIPIENT) == amount_out
        assert market.tokens["WETH"].balance_of(MANAGER) == 0

    def test_quote_precedes_swap_and_floor_uses_quote(self, market: Market) -> None:
        executor, spy = make_executor(market, slippage_bps=950)
        fund_manager(market, "WETH", 10**18)
        route = DirectRoute(source=market.address("WETH"), dest=market.address("USDC"))
        expected = market.deployment.router.get_amounts_out(10**18, route.path)[-1]

        executor.execute(10**18, route, RECIPIENT)

        assert [name for name, _, _ in spy.calls] == [
            "get_amounts_out",
            "swap_exact_tokens_for_tokens",
        ]
        (args, kwargs) = spy.method_calls("swap_exact_tokens_for_tokens")[0]
        amount_in, min_out, path, to, deadline = args
        assert amount_in == 10**18
        assert min_out == expected * 950 // 1000
        assert path == route.path
        assert to == RECIPIENT
        assert deadline == market.chain.now() + DEADLINE_WINDOW
        assert kwargs == {"sender": MANAGER}

    def test_single_hop_swap_uses_three_asset_path(self, market: Market) -> None:
        executor, spy = make_executor(market)
        fund_manager(market, "GNO", 100 * 10**18)
        route = SingleHopRoute(
            source=market.address("GNO"),
            intermediate=market.address("WETH"),
            dest=market.address("USDC"),
        )

        amount_out = executor.execute(100 * 10**18, route, RECIPIENT)

        (args, _) = spy.method_calls("swap_exact_tokens_for_tokens")[0]
        assert args[2] == route.path
        assert market.tokens["USDC"].balance_of(RECIPIENT) == amount_out
        # Nothing is left in the intermediate
        assert market.tokens["WETH"].balance_of(MANAGER) == 0

    def test_approves_exact_input_amount(self, market: Market) -> None:
        executor, _ = make_executor(market)
        fund_manager(market, "WETH", 5 * 10**18)
        route = DirectRoute(source=market.address("WETH"), dest=market.address("USDC"))

        executor.execute(2 * 10**18, route, RECIPIENT)

        # Allowance fully consumed by the swap
        weth = market.tokens["WETH"]
        assert weth.allowance(MANAGER, market.deployment.router.address) == 0
        assert weth.balance_of(MANAGER) == 3 * 10**18

    def test_price_moved_past_floor_is_rejected(self, market: Market) -> None:
        """A quote that is stale by execution time fails with no retry."""
        router = market.deployment.router
        weth = market.tokens["WETH"]

        class FrontRunningRouter:
            """Sells WETH into the pool right after quoting."""

            address = router.address

            def get_amounts_out(self, amount_in: int, path: list[str]) -> list[int]:
                amounts = router.get_amounts_out(amount_in, path)
                weth.mint(LP_PROVIDER, 10 * 10**18)
                weth.approve(router.address, 10 * 10**18, sender=LP_PROVIDER)
                router.swap_exact_tokens_for_tokens(
                    10 * 10**18, 0, path, LP_PROVIDER, market.chain.now() + 60, sender=LP_PROVIDER
                )
                return amounts

            def swap_exact_tokens_for_tokens(self, *args, **kwargs) -> list[int]:
                return router.swap_exact_tokens_for_tokens(*args, **kwargs)

        spy = SpyRouter(FrontRunningRouter())
        store = ConfigurationStore(ManagerConfig(owner=OWNER, slippage_bps=1000))
        executor = SwapExecutor(MANAGER, market.chain, spy, store)
        fund_manager(market, "WETH", 10**18)
        route = DirectRoute(source=market.address("WETH"), dest=market.address("USDC"))

        with pytest.raises(ExternalCallFailure) as exc_info:
            executor.execute(10**18, route, RECIPIENT)

        assert exc_info.value.reason == "INSUFFICIENT_OUTPUT_AMOUNT"
        assert len(spy.method_calls("swap_exact_tokens_for_tokens")) == 1
        assert market.tokens["USDC"].balance_of(RECIPIENT) == 0

    def test_zero_input_is_rejected_by_exchange(self, market: Market) -> None:
        executor, _ = make_executor(market)
        route = DirectRoute(source=market.address("WETH"), dest=market.address("USDC"))

        with pytest.raises(ExternalCallFailure) as exc_info:
            executor.execute(0, route, RECIPIENT)
        assert exc_info.value.reason == "INSUFFICIENT_INPUT_AMOUNT"

    def test_slippage_read_at_call_time(self, market: Market) -> None:
        spy = SpyRouter(market.deployment.router)
        store = ConfigurationStore(ManagerConfig(owner=OWNER, slippage_bps=990))
        executor = SwapExecutor(MANAGER, market.chain, spy, store)
        fund_manager(market, "WETH", 10**18)
        route = DirectRoute(source=market.address("WETH"), dest=market.address("USDC"))

        store.set_slippage(0)
        executor.execute(10**18, route, RECIPIENT)

        (args, _) = spy.method_calls("swap_exact_tokens_for_tokens")[0]
        assert args[1] == 0


class TestForward:
    def test_forward_transfers_full_balance_without_swap(self, market: Market) -> None:
        executor, spy = make_executor(market)
        fund_manager(market, "USDC", 1_234_567)

        amount = executor.forward(market.address("USDC"), RECIPIENT)

        assert amount == 1_234_567
        assert market.tokens["USDC"].balance_of(RECIPIENT) == 1_234_567
        assert market.tokens["USDC"].balance_of(MANAGER) == 0
        assert spy.calls == []
