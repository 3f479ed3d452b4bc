from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from contextlib import asynccontextmanager
from slowapi import _rate_limit_exceeded_handler
# Settings and logging
from app.core.config import get_settings
from app.core.logging_config import configure_logging
# Rate Limiter
from app.core.route_limiters import limiter
# Routers
from app.routes.health import router as health_router
from app.routes.interview_feedback import router as interview_feedback_router
from app.routes.interview_questions import router as interview_questions_router
from app.routes.interview_conversation import router as interview_conversation_router
from app.routes.speech_key import router as speech_key_router
# CORS Middleware
from app.core.cors_middleware import add_cors_middleware
# Logger
from loguru import logger
# Error Handling
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.errors.handlers import http_exception_handler, validation_exception_handler, generic_exception_handler

settings = get_settings()
configure_logging(settings)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    # Startup
    missing = [
        name for name, value in (
            ("OPENAI_API_KEY", settings.openai_api_key),
            ("GROQ_API_KEY", settings.groq_api_key),
            ("DEEPGRAM_API_KEY", settings.deepgram_api_key),
        ) if not value
    ]
    if missing:
        logger.warning(f"Missing credentials, dependent endpoints will fail: {', '.join(missing)}")
    logger.info(f"Application startup completed successfully (env={settings.app_env})")

    yield

    # Shutdown
    logger.info("Application shutdown")

# Initialize FastAPI app
app = FastAPI(
    title="Interview Practice API",
    description="Backend for the mock interview practice app",
    version="0.1.0",
    lifespan=lifespan
)
# Add CORS middleware
add_cors_middleware(app, settings.cors_origins)

# Centralized error handlers
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Add rate limiter to the app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Include routers
app.include_router(health_router)
app.include_router(interview_feedback_router)
app.include_router(interview_questions_router)
app.include_router(interview_conversation_router)
app.include_router(speech_key_router)
