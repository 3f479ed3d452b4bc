"""
Shared test fixtures

Environment is set before the application is imported so the cached Settings
and the rate limiter pick it up: limiting is disabled and fake credentials are
present. Upstream providers are never contacted; routes get a fake gateway
through FastAPI dependency overrides.

Author: @kcaparas1630
"""
import os

os.environ["APP_ENV"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["GROQ_API_KEY"] = "test-groq-key"
os.environ["DEEPGRAM_API_KEY"] = "test-deepgram-key"

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from app.core.config import EndpointTimeouts, Settings, get_settings
from app.main import app
from app.services.upstream.llm_gateway import get_llm_gateway
from app.test.fakes import make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_gateway():
    """Install a gateway for one test: use_gateway(gateway, settings=None)."""

    def install(gateway, settings: Optional[Settings] = None):
        app.dependency_overrides[get_llm_gateway] = lambda: gateway
        app.dependency_overrides[get_settings] = lambda: settings or make_settings()
        return gateway

    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def tiny_timeouts() -> EndpointTimeouts:
    return EndpointTimeouts(**{name: 0.05 for name in EndpointTimeouts.model_fields})
