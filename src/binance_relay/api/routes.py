"""
Binance Relay API Routes
Defines the relay endpoint and the health endpoints
"""
import time
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from binance_relay.core.config import Settings
from binance_relay.core.exceptions import utc_timestamp
from binance_relay.core.relay import SigningRelay
from binance_relay.core.upstream import HTTPUpstreamClient, UpstreamClient
from binance_relay.models.relay import ErrorResponse, HealthResponse, RelayRequest, RootResponse

# Create API router
router = APIRouter()

# Reference point for /health uptime
PROCESS_STARTED_AT = time.monotonic()


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with"""
    return request.app.state.settings


async def get_upstream_client(
    settings: Settings = Depends(get_app_settings)
) -> AsyncIterator[UpstreamClient]:
    """
    Dependency injection for the upstream client
    A fresh client is opened for each request and closed once it is answered
    """
    async with HTTPUpstreamClient(settings) as client:
        yield client


async def get_signing_relay(
    upstream: UpstreamClient = Depends(get_upstream_client),
    settings: Settings = Depends(get_app_settings)
) -> SigningRelay:
    """Dependency injection for the signing relay"""
    return SigningRelay(upstream=upstream, settings=settings)


@router.get("/",
           tags=["health"],
           summary="Server Status",
           response_model=RootResponse)
async def root():
    """Root endpoint confirming the relay is running"""
    return {
        "status": "OK",
        "message": "Binance Proxy Server Running",
        "timestamp": utc_timestamp()
    }


@router.get("/health",
           tags=["health"],
           summary="Health Check",
           response_model=HealthResponse)
async def health_check():
    """Health check endpoint reporting process uptime"""
    return {
        "status": "healthy",
        "uptime": time.monotonic() - PROCESS_STARTED_AT
    }


@router.post("/binance-proxy",
            tags=["proxy"],
            summary="Relay Binance Request",
            description="Sign (when required) and forward a GET request to the Binance REST API",
            responses={
                400: {"model": ErrorResponse, "description": "Missing credentials or upstream rejection"},
                500: {"model": ErrorResponse, "description": "Internal or connectivity failure"},
            })
async def binance_proxy(
    payload: RelayRequest,
    relay: SigningRelay = Depends(get_signing_relay)
):
    """
    Relay a request to Binance

    The upstream JSON payload is returned unchanged on success. Upstream
    failures are always reported with status 400, the upstream's status
    being carried in the body.
    """
    result = await relay.handle(payload)
    return JSONResponse(content=result.body, status_code=result.status_code)
