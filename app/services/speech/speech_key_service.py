"""
Speech Key Service Module

Issues the Deepgram credential the browser streams audio with. A short-lived
key scoped to usage:write is minted on the account's first project so the
long-lived key never leaves the server.

If minting fails, the long-lived key is handed out instead only when
DEEPGRAM_ALLOW_KEY_FALLBACK is enabled; otherwise the failure is reported.

Author: @kcaparas1630
"""
from fastapi import HTTPException
from app.core.config import Settings
from app.core.logging_config import endpoint_logger
from app.errors.exceptions import ConfigurationError, UpstreamMalformedResponseError
from app.schemas.speech_key_response import SpeechKeyResponse
from app.services.upstream.deepgram_client import DeepgramClient

log = endpoint_logger("api/key")


def first_project_id(projects) -> str:
    items = projects.get("projects") if isinstance(projects, dict) else None
    first = items[0] if isinstance(items, list) and items else None
    project_id = first.get("project_id") if isinstance(first, dict) else None
    if not project_id:
        raise UpstreamMalformedResponseError("No Deepgram project found")
    return project_id


class SpeechKeyService:
    def __init__(self, client: DeepgramClient, settings: Settings):
        self.client = client
        self.settings = settings

    async def _mint_temporary_key(self) -> str:
        projects = await self.client.list_projects(log=log)
        project_id = first_project_id(projects)
        log.debug(f"Project found | projectId={project_id}")

        created = await self.client.create_key(project_id, self.settings.deepgram_key_ttl_seconds, log=log)
        key = created.get("key") if isinstance(created, dict) else None
        if not key:
            raise UpstreamMalformedResponseError("Could not create temporary Deepgram key")
        return key

    async def issue_key(self) -> SpeechKeyResponse:
        """
        Return a short-lived Deepgram key for the browser.

        Raises:
            ConfigurationError: If DEEPGRAM_API_KEY is not set.
            UpstreamError | UpstreamTimeoutError | UpstreamMalformedResponseError:
                If minting fails and the long-lived key fallback is disabled.
        """
        if not self.settings.deepgram_api_key:
            log.error("DEEPGRAM_API_KEY not set")
            raise ConfigurationError("DEEPGRAM_API_KEY")

        try:
            key = await self._mint_temporary_key()
        except HTTPException as e:
            if not self.settings.deepgram_allow_key_fallback:
                log.error(f"Temp key failed: {e.detail}")
                raise
            log.warning(f"Temp key failed, falling back to main key: {e.detail}")
            return SpeechKeyResponse(key=self.settings.deepgram_api_key)

        log.info("Temp key created")
        return SpeechKeyResponse(key=key)
