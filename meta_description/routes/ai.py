"""
AI endpoints.

Thin HTTP wrappers over ``ApiClient``. Failures come back from the client as
values and are rendered as ``{"error": {"code", "message"}}``.

Usage:
    GET  /ai/providers   - Registered providers
    POST /ai/models      - Model list of one provider
    POST /ai/summary     - Generate a meta description (rate limited)
"""
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from meta_description.config import get_logger, settings
from meta_description.dependencies import RequestSizeValidator, get_app_state, limiter
from meta_description.models import (
    ErrorResponse,
    ModelInfo,
    ModelsRequest,
    ModelsResponse,
    ProviderInfo,
    ProvidersResponse,
    SummaryRequest,
    SummaryResponse,
)
from meta_description.result import ApiError
from meta_description.state import AppState

logger = get_logger("routes.ai")

router = APIRouter(prefix="/ai", tags=["AI"])

CLIENT_ERROR_CODES: frozenset[str] = frozenset(
    {"provider_not_found", "api_key_missing", "validation_error"}
)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Unknown provider, missing key or empty content"},
    429: {"description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Vendor response could not be used"},
    502: {"model": ErrorResponse, "description": "Vendor request failed"},
}


def error_status_code(error: ApiError) -> int:
    """
    Map a failure to the HTTP status returned to the caller.

    Client-side codes map to 400, vendor HTTP failures keep the upstream
    status when it is an error status, everything else is a 500.
    """
    if error.code in CLIENT_ERROR_CODES:
        return status.HTTP_400_BAD_REQUEST
    if error.code == "http_error" and error.status and error.status >= 400:
        return error.status
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=error_status_code(error),
        content={"error": error.to_dict()},
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/providers",
    response_model=ProvidersResponse,
    summary="List providers",
    description="Returns every registered provider and whether it has an API key.",
)
async def list_providers(state: AppState = Depends(get_app_state)) -> ProvidersResponse:
    return ProvidersResponse(
        providers=[
            ProviderInfo(
                name=provider.name(),
                title=provider.title(),
                default_model=provider.default_model(),
                model=provider.model,
                key_acquisition_url=provider.key_acquisition_url(),
                available=provider.is_available(),
            )
            for provider in state.api_client.list_providers()
        ]
    )


@router.post(
    "/models",
    response_model=ModelsResponse,
    response_model_by_alias=True,
    summary="List models",
    description="Fetches the models a provider offers for summaries.",
    responses=_ERROR_RESPONSES,
)
async def fetch_models(
    body: ModelsRequest,
    _: RequestSizeValidator,
    state: AppState = Depends(get_app_state),
) -> ModelsResponse | JSONResponse:
    result = await state.api_client.fetch_models(body.provider)
    if not result.ok:
        return error_response(result.error)

    return ModelsResponse(
        models=[ModelInfo(id=m.id, display_name=m.display_name) for m in result.value]
    )


@router.post(
    "/summary",
    response_model=SummaryResponse,
    summary="Generate a meta description",
    description=(
        "Sanitizes the content, builds the provider's prompt and returns "
        "the generated description."
    ),
    responses=_ERROR_RESPONSES,
)
@limiter.limit(settings.RATE_LIMIT)
async def generate_summary(
    request: Request,
    body: SummaryRequest,
    _: RequestSizeValidator,
    state: AppState = Depends(get_app_state),
) -> SummaryResponse | JSONResponse:
    result = await state.api_client.generate_summary(
        body.provider,
        body.content,
        model=body.model,
    )
    if not result.ok:
        return error_response(result.error)

    provider = state.registry.resolve(body.provider)
    return SummaryResponse(
        summary=result.value,
        provider=body.provider,
        model=body.model or (provider.model if provider else ""),
    )
