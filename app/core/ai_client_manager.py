"""
AI Client Manager

This module manages one AsyncOpenAI client per text-generation provider.
OpenAI is reached directly; Groq is reached through its OpenAI-compatible
base URL. Clients are created lazily from the process Settings the first time
a provider is requested and reused afterwards.

Automatic SDK retries are disabled: a failed call is surfaced once and the
browser decides whether to retry.

Author: @kcaparas1630
"""

import threading
from typing import Dict, Optional
from openai import AsyncOpenAI
from loguru import logger
from app.core.config import Settings, get_settings
from app.errors.exceptions import ConfigurationError

OPENAI = "openai"
GROQ = "groq"

PROVIDER_LABELS = {
    OPENAI: "OpenAI",
    GROQ: "Groq",
}

_CREDENTIAL_NAMES = {
    OPENAI: "OPENAI_API_KEY",
    GROQ: "GROQ_API_KEY",
}


class AIClientManager:
    """
    Manages dedicated AI client instances for each provider.

    Credentials are checked before a client is built, so a missing key is
    reported as a configuration error before any request leaves the process.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._clients: Dict[str, AsyncOpenAI] = {}
        self._lock = threading.Lock()

    def _credentials(self, provider: str):
        if provider == OPENAI:
            return self._settings.openai_api_key, self._settings.openai_base_url
        if provider == GROQ:
            return self._settings.groq_api_key, self._settings.groq_base_url
        raise ValueError(f"Unsupported provider: {provider}. Available: {list(_CREDENTIAL_NAMES)}")

    def get_client(self, provider: str) -> AsyncOpenAI:
        """
        Get the dedicated client for a provider.

        Args:
            provider (str): "openai" or "groq"

        Returns:
            AsyncOpenAI: Client bound to the provider's base URL and key

        Raises:
            ConfigurationError: If the provider's API key is not set
            ValueError: If the provider is not supported
        """
        api_key, base_url = self._credentials(provider)
        if not api_key:
            logger.error(f"{_CREDENTIAL_NAMES[provider]} not set")
            raise ConfigurationError(_CREDENTIAL_NAMES[provider])

        client = self._clients.get(provider)
        if client is None:
            with self._lock:
                # Double-check locking pattern
                client = self._clients.get(provider)
                if client is None:
                    client = AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
                    self._clients[provider] = client
                    logger.info(f"Initialized {PROVIDER_LABELS[provider]} client")
        return client

    def get_openai_client(self) -> AsyncOpenAI:
        return self.get_client(OPENAI)

    def get_groq_client(self) -> AsyncOpenAI:
        return self.get_client(GROQ)


_ai_manager: Optional[AIClientManager] = None
_manager_lock = threading.Lock()

def get_ai_client_manager() -> AIClientManager:
    """
    Get the process-wide AIClientManager, creating it on first use.

    Returns:
        AIClientManager: The shared instance
    """
    global _ai_manager

    if _ai_manager is None:
        with _manager_lock:
            # Double-check locking pattern
            if _ai_manager is None:
                _ai_manager = AIClientManager(get_settings())

    return _ai_manager
