"""
Deepgram Client Module

Minimal client for the two Deepgram management calls the browser needs in
order to stream speech-to-text without holding the long-lived key: list the
account's projects, then mint a short-lived key on the first project.

Dependencies:
- httpx: For the outbound HTTP calls.
- app.services.upstream.bounded_call: For the deadline and error classification.

Author: @kcaparas1630
"""
from typing import Any, Dict, Optional
import httpx
from loguru import logger
from app.core.config import Settings, get_settings
from app.errors.exceptions import ConfigurationError, UpstreamMalformedResponseError
from app.helper.response_normalizer import DIAGNOSTIC_PREVIEW_CHARS
from app.services.upstream.bounded_call import bounded_call

PROVIDER = "Deepgram"


class DeepgramClient:
    def __init__(self, api_key: Optional[str], base_url: str, timeout: float, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("DEEPGRAM_API_KEY")
        return {
            "Authorization": f"Token {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _request(self, method: str, path: str, log, json: Optional[Dict[str, Any]] = None) -> Any:
        headers = self._headers()

        async def send():
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, path, headers=headers, json=json)
                response.raise_for_status()
                try:
                    return response.json()
                except ValueError as e:
                    log.error(f"Deepgram returned a non-JSON body: {response.text[:DIAGNOSTIC_PREVIEW_CHARS]!r}")
                    raise UpstreamMalformedResponseError("Deepgram returned an invalid response") from e

        return await bounded_call(send, timeout=self.timeout, provider=PROVIDER, log=log)

    async def list_projects(self, log=logger) -> Dict[str, Any]:
        return await self._request("GET", "/projects", log)

    async def create_key(self, project_id: str, ttl_seconds: int, log=logger) -> Dict[str, Any]:
        payload = {
            "comment": "temp",
            "scopes": ["usage:write"],
            "time_to_live_in_seconds": ttl_seconds,
        }
        return await self._request("POST", f"/projects/{project_id}/keys", log, json=payload)


def get_deepgram_client() -> DeepgramClient:
    settings: Settings = get_settings()
    return DeepgramClient(
        api_key=settings.deepgram_api_key,
        base_url=settings.deepgram_base_url,
        timeout=settings.timeouts.speech_key,
    )
