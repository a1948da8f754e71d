"""
Health check endpoints.

This module provides health monitoring endpoints for:
- Liveness probes (ping)
- Readiness probes (ready)
- Provider overview (health)

Usage:
    GET /           - Provider overview
    GET /health     - Provider overview (alias)
    GET /ping       - Simple liveness probe
    GET /ready      - Readiness probe
"""
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from meta_description import __version__
from meta_description.config import get_logger
from meta_description.dependencies import get_app_state
from meta_description.models import HealthResponse, PingResponse, ReadinessResponse
from meta_description.state import AppState

logger = get_logger("routes.health")

router = APIRouter(tags=["Health"])


# =============================================================================
# Health Check Endpoint
# =============================================================================

@router.get(
    "/",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the registered providers and whether each has an API key.",
    responses={
        200: {"description": "At least one provider is usable"},
        503: {"description": "No provider has an API key"},
    },
)
@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check (alias)",
    description="Alias for root health check endpoint.",
    responses={
        200: {"description": "At least one provider is usable"},
        503: {"description": "No provider has an API key"},
    },
)
async def health_check(
    state: AppState = Depends(get_app_state),
) -> HealthResponse | JSONResponse:
    """
    Report provider status.

    The overall status is:
    - **healthy**: every registered provider has an API key
    - **degraded**: some providers are missing a key
    - **unhealthy**: no provider is usable

    No vendor is contacted; this only reflects configuration.
    """
    providers: dict[str, Any] = {
        provider.name(): {
            "title": provider.title(),
            "model": provider.model,
            "available": provider.is_available(),
        }
        for provider in state.registry.all()
    }
    available = sum(1 for info in providers.values() if info["available"])

    if providers and available == len(providers):
        overall_status = "healthy"
    elif available:
        overall_status = "degraded"
    else:
        overall_status = "unhealthy"

    response = HealthResponse(
        status=overall_status,
        providers=providers,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
    )

    if overall_status == "unhealthy":
        logger.warning("Health check: no provider has an API key")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )
    return response


# =============================================================================
# Liveness Probe
# =============================================================================

@router.get(
    "/ping",
    response_model=PingResponse,
    summary="Liveness probe",
    description="Simple ping endpoint for keepalive checks. Does not verify provider health.",
)
async def ping() -> PingResponse:
    """Always 200 while the server is running."""
    return PingResponse(status="ok")


# =============================================================================
# Readiness Probe
# =============================================================================

@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Ready when at least one registered provider has an API key.",
    responses={503: {"description": "Service is not ready"}},
)
async def readiness_check(
    state: AppState = Depends(get_app_state),
) -> ReadinessResponse | JSONResponse:
    checks = {provider.name(): provider.is_available() for provider in state.registry.all()}
    response = ReadinessResponse(ready=state.is_ready(), checks=checks)

    if not response.ready:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )
    return response
