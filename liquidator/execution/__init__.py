"""Unwinding LP positions and executing the resulting swaps."""

from liquidator.execution.swap import SwapExecutor, compute_min_out
from liquidator.execution.unwind import LiquidityUnwinder, UnwindResult

__all__ = ["SwapExecutor", "compute_min_out", "LiquidityUnwinder", "UnwindResult"]
