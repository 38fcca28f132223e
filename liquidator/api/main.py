"""FastAPI application for the fee liquidator.

Note: Authentication is not implemented at the application level. The
caller field of each request is trusted as-is; deploy behind a gateway
that authenticates it.
"""

import logging

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from liquidator.api.endpoints import router
from liquidator.config import LiquidatorSettings
from liquidator.errors import (
    AuthorizationError,
    ConfigurationError,
    ExternalCallFailure,
    LiquidatorError,
    RouteNotFoundError,
)

logger = structlog.get_logger()

# Status code per error class; the first matching base class wins
ERROR_STATUS: list[tuple[type[LiquidatorError], int]] = [
    (AuthorizationError, 403),
    (ConfigurationError, 400),
    (RouteNotFoundError, 422),
    (ExternalCallFailure, 409),
]

app = FastAPI(
    title="Fee Liquidator",
    description="Unwinds LP fee positions and routes them into a single asset",
    version="0.1.0",
)


@app.exception_handler(LiquidatorError)
async def liquidator_error_handler(request: Request, exc: LiquidatorError) -> JSONResponse:
    """Map a rejected (and rolled back) call to an error response."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS if isinstance(exc, error_type)),
        500,
    )
    logger.warning(
        "call_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        detail=str(exc),
        status_code=status_code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def configure_logging(debug: bool = False) -> None:
    log_level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def run() -> None:
    """Run the liquidator API server.

    Configuration via environment variables:
    - LIQUIDATOR_HOST: Host to bind to (default: 0.0.0.0)
    - LIQUIDATOR_PORT: Port to bind to (default: 8000)
    - LIQUIDATOR_DEBUG: Enable debug logging and reload (default: false)
    - LIQUIDATOR_ADDRESS, LIQUIDATOR_OWNER, LIQUIDATOR_SLIPPAGE_BPS,
      LIQUIDATOR_INTERMEDIATE_ASSETS: initial manager configuration
    """
    settings = LiquidatorSettings.from_env()
    configure_logging(settings.debug)
    uvicorn.run(
        "liquidator.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
