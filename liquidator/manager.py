"""Fee manager: the externally callable entry point of the liquidator.

FeeManager owns the configuration store and wires the pipeline

    process_batch -> LiquidityUnwinder -> PathResolver -> SwapExecutor

for every LP position of a batch. A batch is all-or-nothing: it runs inside
the environment's atomic block, so any failure rolls back every transfer,
approval and event of the whole batch before the exception reaches the
caller.

Every state-changing entry point is owner-only and non-reentrant.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from functools import wraps
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from liquidator.config import ConfigurationStore, ManagerConfig
from liquidator.errors import AuthorizationError, ReentrancyError
from liquidator.events import LiquidityTokensSwapped, NativeSwept
from liquidator.execution.swap import SwapExecutor
from liquidator.execution.unwind import LiquidityUnwinder, UnwindResult
from liquidator.models.types import is_zero_address, normalize_address
from liquidator.routing.resolver import PathResolver

if TYPE_CHECKING:
    from liquidator.events import Event
    from liquidator.interfaces import Environment, ExchangeRouter, PoolRegistry

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class BatchReceipt:
    """Outcome of a committed batch.

    Attributes:
        positions: LP pair addresses in processing order
        output_asset: Target asset, or None for a split-only batch
        recipient: Address that received the proceeds
        results: Per-position unwind results
        events: Events emitted by the batch
    """

    positions: tuple[str, ...]
    output_asset: str | None
    recipient: str
    results: tuple[UnwindResult, ...] = ()
    events: tuple[Event, ...] = field(default_factory=tuple)


def only_owner(method: F) -> F:
    """Reject callers other than the configured owner before anything runs."""

    @wraps(method)
    def wrapper(self: FeeManager, caller: str, *args: Any, **kwargs: Any) -> Any:
        if normalize_address(caller) != self.owner:
            logger.debug("unauthorized_call", operation=method.__name__, caller=caller[-8:])
            raise AuthorizationError(normalize_address(caller), method.__name__)
        return method(self, caller, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class FeeManager:
    """Liquidates LP fee positions into a single output asset.

    Args:
        address: Account the manager acts as (holds LP positions and native balance)
        environment: Execution environment (clock, atomicity, events, contracts)
        registry: Pool existence oracle for route resolution
        router: Exchange router for unwinding and swapping
        config: Initial configuration (owner, intermediates, slippage)
    """

    def __init__(
        self,
        address: str,
        environment: Environment,
        registry: PoolRegistry,
        router: ExchangeRouter,
        config: ManagerConfig,
    ) -> None:
        self.address = normalize_address(address, validate=True)
        self._env = environment
        self._store = ConfigurationStore(config)
        self._entered = False

        self.resolver = PathResolver(registry, self._store)
        self.executor = SwapExecutor(self.address, environment, router, self._store)
        self.unwinder = LiquidityUnwinder(
            self.address, environment, router, self.resolver, self.executor
        )

    @property
    def config(self) -> ManagerConfig:
        return self._store.config

    @property
    def owner(self) -> str:
        return self._store.owner

    @contextmanager
    def _non_reentrant(self, operation: str) -> Iterator[None]:
        if self._entered:
            raise ReentrancyError(operation)
        self._entered = True
        try:
            yield
        finally:
            self._entered = False

    def _commit(self, operation: str, apply: Callable[[], Event]) -> Event:
        """Apply a configuration change and emit its event atomically."""
        with self._non_reentrant(operation), self._env.atomic():
            event = apply()
            self._env.emit(event)
        return event

    @only_owner
    def process_batch(
        self,
        caller: str,
        positions: Sequence[str],
        output_asset: str | None,
        recipient: str,
    ) -> BatchReceipt:
        """Unwind every position and deliver the proceeds to recipient.

        Args:
            caller: Account invoking the operation (must be the owner)
            positions: LP pair addresses, processed in this order
            output_asset: Asset to convert everything into; None or the zero
                address forwards the underlying assets unconverted
            recipient: Address receiving the proceeds

        Returns:
            BatchReceipt for the committed batch

        Raises:
            AuthorizationError: If caller is not the owner
            RouteNotFoundError: If any underlying asset has no route to output_asset
            ExternalCallFailure: If any exchange or asset call is rejected
        """
        position_list = tuple(normalize_address(p) for p in positions)
        output = None if is_zero_address(output_asset) else normalize_address(output_asset)
        recipient = normalize_address(recipient)

        logger.info(
            "batch_started",
            positions=len(position_list),
            output_asset=output[-8:] if output else None,
            recipient=recipient[-8:],
        )
        with self._non_reentrant("process_batch"), self._env.atomic():
            results = tuple(
                self.unwinder.unwind(position, output, recipient) for position in position_list
            )
            event = LiquidityTokensSwapped(
                lp_tokens=position_list, output_token=output, recipient=recipient
            )
            self._env.emit(event)

        logger.info(
            "batch_completed",
            positions=len(position_list),
            output_total=sum(sum(r.outputs) for r in results if r.outputs is not None),
        )
        return BatchReceipt(
            positions=position_list,
            output_asset=output,
            recipient=recipient,
            results=results,
            events=(event,),
        )

    @only_owner
    def set_intermediate_assets(self, caller: str, assets: Sequence[str]) -> Event:
        """Replace the intermediate-asset list. Emits ChangedPossiblePaths."""
        event = self._commit(
            "set_intermediate_assets", lambda: self._store.set_intermediate_assets(assets)
        )
        logger.info("intermediate_assets_changed", count=len(self._store.intermediate_assets))
        return event

    @only_owner
    def set_slippage(self, caller: str, slippage_bps: int) -> Event:
        """Replace the slippage tolerance. Emits SlippageChanged.

        Raises:
            ConfigurationError: If slippage_bps is outside [0, 1000]
        """
        event = self._commit("set_slippage", lambda: self._store.set_slippage(slippage_bps))
        logger.info("slippage_changed", slippage_bps=slippage_bps)
        return event

    @only_owner
    def transfer_ownership(self, caller: str, new_owner: str) -> Event:
        """Hand administration to new_owner. Emits OwnershipTransferred."""
        event = self._commit("transfer_ownership", lambda: self._store.set_owner(new_owner))
        logger.info("ownership_transferred", new_owner=normalize_address(new_owner)[-8:])
        return event

    @only_owner
    def sweep_native(self, caller: str, to: str) -> Event:
        """Send the manager's entire native-currency balance to `to`. Emits NativeSwept."""
        to = normalize_address(to)

        def sweep() -> Event:
            amount = self._env.native_balance_of(self.address)
            self._env.transfer_native(self.address, to, amount)
            return NativeSwept(to=to, amount=amount)

        event = self._commit("sweep_native", sweep)
        logger.info("native_swept", to=to[-8:])
        return event


__all__ = ["FeeManager", "BatchReceipt", "only_owner"]
