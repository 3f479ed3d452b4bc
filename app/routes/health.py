"""
Liveness API Route

Description:
GET /api/health answers {"status": "ok"} whenever the process is serving
requests. No provider is called. Missing provider credentials are logged by
name so a misconfigured deployment shows up in the logs before the first
interview fails; the status stays "ok" because the process itself is alive.

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- app.core.config: For checking which provider credentials are set.
- app.core.route_limiters: For rate limiting functionality.
- app.core.logging_config: For the per-endpoint logger.

Author: @kcaparas1630

"""
from fastapi import APIRouter, Depends, Request
from app.core.config import Settings, get_settings
from app.core.logging_config import endpoint_logger
from app.core.route_limiters import limiter
from app.schemas.health_response import HealthResponse

log = endpoint_logger("api/health")

# Environment variable name -> Settings attribute
PROVIDER_CREDENTIALS = {
    "GROQ_API_KEY": "groq_api_key",
    "OPENAI_API_KEY": "openai_api_key",
    "DEEPGRAM_API_KEY": "deepgram_api_key",
}

router = APIRouter(
    prefix="/api",
    tags=["health"],
)


def missing_credentials(settings: Settings) -> list:
    """Names of the provider credentials that are unset or blank."""
    return [name for name, attr in PROVIDER_CREDENTIALS.items() if not getattr(settings, attr, None)]


@router.get("/health", response_model=HealthResponse)
@limiter.limit("10/minute")
async def health(request: Request, settings: Settings = Depends(get_settings)) -> HealthResponse:
    missing = missing_credentials(settings)
    if missing:
        log.warning(f"Health check: credentials not configured: {', '.join(missing)}")
    else:
        log.debug("Health check: all provider credentials configured")
    return HealthResponse()
