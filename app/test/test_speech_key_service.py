"""
Test Speech Key Service Module

Deepgram is replaced by an httpx.MockTransport so the real client code runs
against canned responses.

Author: @kcaparas1630
"""

import json
import httpx
import pytest
from fastapi import HTTPException
from app.services.speech.speech_key_service import SpeechKeyService, first_project_id
from app.services.upstream.deepgram_client import DeepgramClient
from app.test.fakes import make_settings

def deepgram_transport(projects_status=200, projects_body=None, key_status=200, key_body=None, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.method == "GET" and request.url.path.endswith("/projects"):
            body = projects_body if projects_body is not None else {"projects": [{"project_id": "proj-1"}]}
            return httpx.Response(projects_status, json=body)
        if request.method == "POST" and request.url.path.endswith("/projects/proj-1/keys"):
            body = key_body if key_body is not None else {"key": "temp-key-123"}
            return httpx.Response(key_status, json=body)
        return httpx.Response(404, json={})

    return httpx.MockTransport(handler)

def make_service(transport, **settings_overrides):
    settings = make_settings(**settings_overrides)
    client = DeepgramClient(
        api_key=settings.deepgram_api_key,
        base_url=settings.deepgram_base_url,
        timeout=settings.timeouts.speech_key,
        transport=transport,
    )
    return SpeechKeyService(client, settings)

class TestFirstProjectId:
    """Test project lookup."""

    def test_first_project(self):
        assert first_project_id({"projects": [{"project_id": "a"}, {"project_id": "b"}]}) == "a"

    @pytest.mark.parametrize("projects", [{}, {"projects": []}, {"projects": [{}]}, None])
    def test_no_project_is_502(self, projects):
        with pytest.raises(HTTPException) as exc_info:
            first_project_id(projects)
        assert exc_info.value.status_code == 502

class TestSpeechKeyService:
    """Test minting and the optional fallback."""

    @pytest.mark.asyncio
    async def test_issues_temporary_key(self):
        seen = []
        service = make_service(deepgram_transport(seen=seen))

        result = await service.issue_key()

        assert result.key == "temp-key-123"
        assert seen[0].headers["Authorization"] == "Token test-deepgram-key"
        payload = json.loads(seen[1].content)
        assert payload == {"comment": "temp", "scopes": ["usage:write"], "time_to_live_in_seconds": 60}

    @pytest.mark.asyncio
    async def test_missing_key_is_500(self):
        service = make_service(deepgram_transport(), deepgram_api_key=None)
        with pytest.raises(HTTPException) as exc_info:
            await service.issue_key()
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "DEEPGRAM_API_KEY is not configured"

    @pytest.mark.asyncio
    async def test_failure_without_fallback_is_reported(self):
        service = make_service(deepgram_transport(key_status=403, key_body={"err": "forbidden"}))
        with pytest.raises(HTTPException) as exc_info:
            await service.issue_key()
        assert exc_info.value.status_code == 502
        assert exc_info.value.detail == "Deepgram API error"

    @pytest.mark.asyncio
    async def test_failure_with_fallback_returns_main_key(self):
        service = make_service(
            deepgram_transport(key_status=403, key_body={"err": "forbidden"}),
            deepgram_allow_key_fallback=True,
        )
        result = await service.issue_key()
        assert result.key == "test-deepgram-key"

    @pytest.mark.asyncio
    async def test_no_projects_with_fallback(self):
        service = make_service(deepgram_transport(projects_body={"projects": []}), deepgram_allow_key_fallback=True)
        result = await service.issue_key()
        assert result.key == "test-deepgram-key"

    @pytest.mark.asyncio
    async def test_unreachable_without_fallback_is_502(self):
        def handler(request):
            raise httpx.ConnectError("dns failure", request=request)

        service = make_service(httpx.MockTransport(handler))
        with pytest.raises(HTTPException) as exc_info:
            await service.issue_key()
        assert exc_info.value.status_code == 502
        assert exc_info.value.detail == "Deepgram API error"

    @pytest.mark.asyncio
    async def test_unreachable_with_fallback_returns_main_key(self):
        def handler(request):
            raise httpx.ConnectError("dns failure", request=request)

        service = make_service(httpx.MockTransport(handler), deepgram_allow_key_fallback=True)
        result = await service.issue_key()
        assert result.key == "test-deepgram-key"

    @pytest.mark.asyncio
    async def test_non_json_body_with_fallback_returns_main_key(self):
        service = make_service(
            httpx.MockTransport(lambda request: httpx.Response(200, text="<html>maintenance</html>")),
            deepgram_allow_key_fallback=True,
        )
        result = await service.issue_key()
        assert result.key == "test-deepgram-key"

    @pytest.mark.asyncio
    async def test_non_json_body_without_fallback_is_502(self):
        service = make_service(httpx.MockTransport(lambda request: httpx.Response(200, text="not json")))
        with pytest.raises(HTTPException) as exc_info:
            await service.issue_key()
        assert exc_info.value.status_code == 502
