"""API endpoints for the fee liquidator."""

import threading

import structlog
from fastapi import APIRouter, Depends

from liquidator.deployment import Deployment, get_default_deployment
from liquidator.models.api import (
    BatchRequest,
    BatchResponse,
    ConfigResponse,
    EventResponse,
    InteractionModel,
    IntermediateAssetsRequest,
    SlippageRequest,
    SweepRequest,
    UnwindResultModel,
)

logger = structlog.get_logger()

router = APIRouter()

# One call at a time against a deployment
_call_lock = threading.Lock()


def get_deployment() -> Deployment:
    """Dependency provider for the deployment.

    Override this in tests to inject a seeded deployment:
        app.dependency_overrides[get_deployment] = lambda: deployment
    """
    return get_default_deployment()


@router.get("/config", response_model=ConfigResponse)
def read_config(deployment: Deployment = Depends(get_deployment)) -> ConfigResponse:
    """Current owner, intermediate assets and slippage tolerance."""
    manager = deployment.manager
    config = manager.config
    return ConfigResponse(
        manager=manager.address,
        owner=config.owner,
        intermediate_assets=list(config.intermediate_assets),
        slippage_bps=config.slippage_bps,
    )


@router.post("/batches", response_model=BatchResponse)
def process_batch(
    request: BatchRequest,
    deployment: Deployment = Depends(get_deployment),
) -> BatchResponse:
    """Liquidate a batch of LP positions.

    The batch either commits entirely or is rolled back; rejections are
    mapped to error responses by the handlers in liquidator.api.main.
    """
    logger.info(
        "received_batch",
        positions=len(request.positions),
        output_asset=request.output_asset,
        recipient=request.recipient,
    )
    with _call_lock:
        interactions_before = len(deployment.chain.interactions)
        receipt = deployment.manager.process_batch(
            request.caller,
            request.positions,
            request.output_asset,
            request.recipient,
        )
        interactions = deployment.chain.interactions[interactions_before:]

    return BatchResponse(
        positions=list(receipt.positions),
        output_asset=receipt.output_asset,
        recipient=receipt.recipient,
        results=[
            UnwindResultModel(
                position=r.position,
                liquidity=r.liquidity,
                amounts=r.amounts,
                outputs=r.outputs,
            )
            for r in receipt.results
        ],
        events=[event.to_dict() for event in receipt.events],
        interactions=[
            InteractionModel(method=i.method, target=i.target, calldata=i.calldata)
            for i in interactions
        ],
    )


@router.put("/config/intermediate-assets", response_model=EventResponse)
def set_intermediate_assets(
    request: IntermediateAssetsRequest,
    deployment: Deployment = Depends(get_deployment),
) -> EventResponse:
    """Replace the intermediate-asset list."""
    with _call_lock:
        event = deployment.manager.set_intermediate_assets(request.caller, request.assets)
    return EventResponse(event=event.to_dict())


@router.put("/config/slippage", response_model=EventResponse)
def set_slippage(
    request: SlippageRequest,
    deployment: Deployment = Depends(get_deployment),
) -> EventResponse:
    """Replace the slippage tolerance."""
    with _call_lock:
        event = deployment.manager.set_slippage(request.caller, request.slippage_bps)
    return EventResponse(event=event.to_dict())


@router.post("/sweep", response_model=EventResponse)
def sweep_native(
    request: SweepRequest,
    deployment: Deployment = Depends(get_deployment),
) -> EventResponse:
    """Send the manager's native-currency balance to an address."""
    with _call_lock:
        event = deployment.manager.sweep_native(request.caller, request.to)
    return EventResponse(event=event.to_dict())
