"""
Application Settings Module

This module builds the process-wide configuration for the service. Every value
that used to live in a module-level constant (provider URLs, model names,
timeouts) is read once from the environment into a Settings instance, which
is then handed to routes and services through FastAPI dependency injection.

Dependencies:
- pydantic: For the typed settings model.
- dotenv: For loading a local .env file during development.

Author: @kcaparas1630
"""
import os
from functools import lru_cache
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


def _get_secret(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


class EndpointTimeouts(BaseModel):
    """Upstream deadline per endpoint, in seconds."""
    pause: float = 10.0
    question: float = 15.0
    script: float = 15.0
    voice_summary: float = 15.0
    coach: float = 20.0
    resume_question: float = 25.0
    jobdesc_question: float = 25.0
    feedback: float = 25.0
    factcheck: float = 25.0
    question_set: float = 25.0
    speech_key: float = 10.0


class Settings(BaseModel):
    app_env: str = "development"
    log_level: Optional[str] = None

    openai_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None
    deepgram_api_key: Optional[str] = None

    openai_base_url: str = "https://api.openai.com/v1"
    groq_base_url: str = "https://api.groq.com/openai/v1"
    deepgram_base_url: str = "https://api.deepgram.com/v1"

    openai_model: str = "gpt-4o-mini"
    groq_question_model: str = "llama-3.3-70b-versatile"
    groq_fast_model: str = "llama-3.1-8b-instant"

    timeouts: EndpointTimeouts = Field(default_factory=EndpointTimeouts)

    deepgram_key_ttl_seconds: int = 60
    deepgram_allow_key_fallback: bool = False

    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    rate_limit_enabled: bool = True
    rate_limit_default: str = "30/minute"

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        defaults = EndpointTimeouts()
        timeouts = EndpointTimeouts(**{
            name: _get_float(f"TIMEOUT_{name.upper()}", getattr(defaults, name))
            for name in EndpointTimeouts.model_fields
        })
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            app_env=os.getenv("APP_ENV", "development"),
            log_level=os.getenv("LOG_LEVEL") or None,
            openai_api_key=_get_secret("OPENAI_API_KEY"),
            groq_api_key=_get_secret("GROQ_API_KEY"),
            deepgram_api_key=_get_secret("DEEPGRAM_API_KEY"),
            openai_base_url=os.getenv("OPENAI_BASE_URL", cls.model_fields["openai_base_url"].default),
            groq_base_url=os.getenv("GROQ_BASE_URL", cls.model_fields["groq_base_url"].default),
            deepgram_base_url=os.getenv("DEEPGRAM_BASE_URL", cls.model_fields["deepgram_base_url"].default),
            openai_model=os.getenv("OPENAI_MODEL", cls.model_fields["openai_model"].default),
            groq_question_model=os.getenv("GROQ_QUESTION_MODEL", cls.model_fields["groq_question_model"].default),
            groq_fast_model=os.getenv("GROQ_FAST_MODEL", cls.model_fields["groq_fast_model"].default),
            timeouts=timeouts,
            deepgram_allow_key_fallback=_get_bool("DEEPGRAM_ALLOW_KEY_FALLBACK", False),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else ["http://localhost:5173"],
            rate_limit_enabled=_get_bool("RATE_LIMIT_ENABLED", True),
            rate_limit_default=os.getenv("RATE_LIMIT_DEFAULT", "30/minute"),
        )


@lru_cache
def get_settings() -> Settings:
    """Return the settings instance shared by the whole process."""
    return Settings.from_env()
