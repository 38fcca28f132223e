"""Pydantic models and shared address/amount types."""

from liquidator.models.api import (
    BatchRequest,
    BatchResponse,
    ConfigResponse,
    ErrorResponse,
    EventResponse,
    IntermediateAssetsRequest,
    SlippageRequest,
    SweepRequest,
)
from liquidator.models.types import (
    Address,
    Uint256,
    is_valid_address,
    is_zero_address,
    normalize_address,
)

__all__ = [
    # Types
    "Address",
    "Uint256",
    "normalize_address",
    "is_valid_address",
    "is_zero_address",
    # Requests
    "BatchRequest",
    "IntermediateAssetsRequest",
    "SlippageRequest",
    "SweepRequest",
    # Responses
    "BatchResponse",
    "ConfigResponse",
    "EventResponse",
    "ErrorResponse",
]
