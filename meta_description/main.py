"""
FastAPI application entry point.

This module initializes the FastAPI application with:
- Lifespan management (startup/shutdown)
- Middleware configuration (CORS, rate limiting)
- Catch-all exception handler
- Route registration

Usage:
    Run with uvicorn:
        uvicorn meta_description.main:app --host 0.0.0.0 --port 8080

    Or with the server.py entry point:
        python server.py
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from meta_description import __version__
from meta_description.config import get_logger, settings
from meta_description.dependencies import limiter
from meta_description.routes import ai, health
from meta_description.state import AppState

logger = get_logger("app.main")


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup builds the gateway, provider registry and API client. The
    gateway holds no open connections, so shutdown has nothing to release.
    """
    logger.info("=" * 60)
    logger.info("Meta Description AI Server Starting...")
    logger.info("=" * 60)
    logger.info(
        "Configuration | models_timeout=%ss | summary_timeout=%ss | description=%d-%d chars",
        settings.MODELS_TIMEOUT_SECONDS,
        settings.SUMMARY_TIMEOUT_SECONDS,
        settings.MIN_DESCRIPTION_LENGTH,
        settings.MAX_DESCRIPTION_LENGTH,
    )

    try:
        app.state.app_state = AppState.create(settings)
        logger.info(
            "Provider Status | %s",
            " | ".join(
                f"{p.name()}={'OK' if p.is_available() else 'NO KEY'}"
                for p in app.state.app_state.registry.all()
            ) or "none registered",
        )
        logger.info("Server ready to accept requests")
        logger.info("=" * 60)
    except Exception as exc:
        logger.critical("Startup failed: %s", exc, exc_info=True)
        raise

    yield

    logger.info("Shutdown complete")


# =============================================================================
# FastAPI Application
# =============================================================================

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    application = FastAPI(
        title="Meta Description AI API",
        description=(
            "Generates SEO meta descriptions through interchangeable AI providers "
            "(Gemini, Mistral, OpenAI, Anthropic, Cohere)."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    configure_rate_limiting(application)
    configure_cors(application)
    configure_exception_handlers(application)
    configure_routes(application)

    return application


# =============================================================================
# Rate Limiting
# =============================================================================

def configure_rate_limiting(application: FastAPI) -> None:
    """Attach the shared limiter used by the summary endpoint."""
    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    logger.debug("Rate limiting configured: %s", settings.RATE_LIMIT)


# =============================================================================
# CORS Configuration
# =============================================================================

def configure_cors(application: FastAPI) -> None:
    """Configure CORS middleware."""
    cors_origins = settings.CORS_ORIGINS_LIST
    allow_credentials = cors_origins != ["*"]

    if not allow_credentials:
        logger.warning(
            "CORS: Wildcard origin '*' configured. "
            "This disables credentials and is NOT recommended for production."
        )
    else:
        logger.info("CORS: Configured for origins: %s", cors_origins)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )


# =============================================================================
# Exception Handlers
# =============================================================================

def configure_exception_handlers(application: FastAPI) -> None:
    """Configure exception handlers."""

    @application.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions."""
        logger.error(
            "Unhandled exception | path=%s | type=%s | error=%s",
            request.url.path,
            type(exc).__name__,
            exc,
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": "internal_error", "message": "Internal server error"}},
        )


# =============================================================================
# Route Configuration
# =============================================================================

def configure_routes(application: FastAPI) -> None:
    application.include_router(health.router)
    application.include_router(ai.router)


# =============================================================================
# Application Instance
# =============================================================================

app = create_app()

