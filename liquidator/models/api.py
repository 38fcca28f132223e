"""Pydantic request/response models for the liquidator HTTP API.

Field names are snake_case in Python and camelCase on the wire; both are
accepted on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from liquidator.models.types import Address, Uint256

_MODEL_CONFIG: dict[str, Any] = {"populate_by_name": True}


class CallerRequest(BaseModel):
    """Base for requests to owner-only operations."""

    caller: Address = Field(description="Account invoking the operation")

    model_config = _MODEL_CONFIG


class BatchRequest(CallerRequest):
    """Liquidate LP positions into one output asset."""

    positions: list[Address] = Field(description="LP pair addresses, processed in order")
    output_asset: Address | None = Field(
        default=None,
        alias="outputAsset",
        description="Target asset; null or the zero address forwards the underlying assets",
    )
    recipient: Address = Field(description="Address receiving the proceeds")


class IntermediateAssetsRequest(CallerRequest):
    """Replace the intermediate-asset list."""

    assets: list[Address] = Field(description="Hop candidates in priority order")


class SlippageRequest(CallerRequest):
    """Replace the slippage tolerance."""

    slippage_bps: Uint256 = Field(
        alias="slippageBps",
        description="Accepted fraction of the quote, in thousandths (0-1000)",
    )


class SweepRequest(CallerRequest):
    """Drain the manager's native-currency balance."""

    to: Address


class UnwindResultModel(BaseModel):
    position: Address
    liquidity: int
    amounts: tuple[int, int]
    outputs: tuple[int, int] | None = None


class InteractionModel(BaseModel):
    method: str
    target: Address
    calldata: str


class BatchResponse(BaseModel):
    """Receipt of a committed batch."""

    positions: list[Address]
    output_asset: Address | None = Field(default=None, alias="outputAsset")
    recipient: Address
    results: list[UnwindResultModel]
    events: list[dict[str, Any]]
    interactions: list[InteractionModel] = Field(default_factory=list)

    model_config = _MODEL_CONFIG


class EventResponse(BaseModel):
    """Event emitted by an administrative operation."""

    event: dict[str, Any]


class ConfigResponse(BaseModel):
    """Current manager configuration."""

    manager: Address
    owner: Address
    intermediate_assets: list[Address] = Field(alias="intermediateAssets")
    slippage_bps: int = Field(alias="slippageBps")

    model_config = _MODEL_CONFIG


class ErrorResponse(BaseModel):
    """Body of a rejected call."""

    error: str
    detail: str


__all__ = [
    "CallerRequest",
    "BatchRequest",
    "IntermediateAssetsRequest",
    "SlippageRequest",
    "SweepRequest",
    "UnwindResultModel",
    "InteractionModel",
    "BatchResponse",
    "EventResponse",
    "ConfigResponse",
    "ErrorResponse",
]
