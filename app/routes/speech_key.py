"""
Speech Key API Route

Description:
This module defines the FastAPI route that hands the browser a short-lived
Deepgram key for streaming speech-to-text.

Returns:
- SpeechKeyResponse with the key.

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- app.services.speech.speech_key_service: For minting the key.
- loguru: For logging information about the request and any errors that occur.

Author: @kcaparas1630

"""
from fastapi import APIRouter, Depends, HTTPException, Request
from app.core.config import Settings, get_settings
from app.core.logging_config import endpoint_logger
from app.core.route_limiters import limiter, DEFAULT_LIMIT
from app.errors.exceptions import InternalServerError
from app.schemas.speech_key_response import SpeechKeyResponse
from app.services.speech.speech_key_service import SpeechKeyService
from app.services.upstream.deepgram_client import DeepgramClient, get_deepgram_client

router = APIRouter(
    prefix="/api",
    tags=["speech"],
    responses={404: {"description": "Not found"}}
)


@router.post("/key", response_model=SpeechKeyResponse)
@limiter.limit(DEFAULT_LIMIT)
async def issue_speech_key(
    request: Request,
    client: DeepgramClient = Depends(get_deepgram_client),
    settings: Settings = Depends(get_settings),
):
    log = endpoint_logger("api/key")
    log.info("Request received")
    try:
        return await SpeechKeyService(client, settings).issue_key()
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Speech key issuance failed: {e}")
        raise InternalServerError("Speech key issuance failed") from e
