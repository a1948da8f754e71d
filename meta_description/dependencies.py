"""
FastAPI dependencies for dependency injection.

This module centralizes the dependencies of the HTTP surface:
- Application state injection
- Rate limiting
- Request validation
- Client information

Usage:
    from meta_description.dependencies import get_app_state, RequestSizeValidator

    @router.post("/endpoint")
    async def endpoint(_: RequestSizeValidator, state: AppState = Depends(get_app_state)):
        ...
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, HTTPException, Request, status
from slowapi import Limiter

from meta_description.config import get_logger, settings

if TYPE_CHECKING:
    from meta_description.state import AppState

logger = get_logger("dependencies")


# =============================================================================
# Application State
# =============================================================================

async def get_app_state(request: Request) -> "AppState":
    """
    FastAPI dependency to get application state.

    Args:
        request: FastAPI request object

    Returns:
        AppState instance

    Raises:
        RuntimeError: If application state is not initialized
    """
    if not hasattr(request.app.state, "app_state"):
        logger.error("Application state not initialized")
        raise RuntimeError("Application state not initialized")
    return request.app.state.app_state


# =============================================================================
# Request Validation
# =============================================================================

async def validate_request_size(request: Request) -> None:
    """
    Validate that request body size is within limits.

    Raises:
        HTTPException: If content length exceeds MAX_REQUEST_SIZE
    """
    content_length = request.headers.get("content-length")
    if not content_length:
        return

    try:
        size = int(content_length)
    except ValueError:
        # Malformed header, the server rejects it on its own
        return

    if size > settings.MAX_REQUEST_SIZE:
        logger.warning("Request rejected: %d bytes > %d", size, settings.MAX_REQUEST_SIZE)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Request body too large. Maximum size: {settings.MAX_REQUEST_SIZE} bytes",
        )


RequestSizeValidator = Annotated[None, Depends(validate_request_size)]


# =============================================================================
# Client Information / Rate Limiting
# =============================================================================

def get_client_ip(request: Request) -> str:
    """
    Get the real client IP address.

    Checks X-Forwarded-For and X-Real-IP headers before falling
    back to the direct client IP.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host

    return "unknown"


limiter = Limiter(key_func=get_client_ip)
