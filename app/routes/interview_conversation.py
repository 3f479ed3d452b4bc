"""
Interview Conversation API Routes

Description:
This module defines the FastAPI routes used while the interview is running
and right after it: pause analysis, scripted interviewer lines, the spoken
debrief, and the coaching chat.

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- app.services.conversation: For the pause, script and coaching services.
- loguru: For logging information about the request and any errors that occur.

Author: @kcaparas1630

"""
from fastapi import APIRouter, Depends, HTTPException, Request
from app.core.config import Settings, get_settings
from app.core.logging_config import endpoint_logger
from app.core.route_limiters import limiter, DEFAULT_LIMIT
from app.errors.exceptions import InternalServerError
from app.schemas.conversation_schemas import (
    PauseRequest,
    PauseResponse,
    ScriptRequest,
    VoiceSummaryRequest,
    TextResponse,
    CoachRequest,
    CoachResponse,
)
from app.services.conversation.coach_service import CoachService
from app.services.conversation.pause_service import PauseService
from app.services.conversation.script_service import ScriptService
from app.services.upstream.llm_gateway import LLMGateway, get_llm_gateway

router = APIRouter(
    prefix="/api",
    tags=["interview-conversation"],
    responses={404: {"description": "Not found"}}
)


@router.post("/pause", response_model=PauseResponse)
@limiter.limit(DEFAULT_LIMIT)
async def analyze_pause(
    request: Request,
    body: PauseRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    """
    Decide whether a candidate who stopped talking has finished their answer
    """
    log = endpoint_logger("api/pause")
    log.debug(f"Request received | words={len(body.transcript.split())}")
    try:
        return await PauseService(gateway, settings).analyze(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Pause analysis failed: {e}")
        raise InternalServerError("Pause analysis failed") from e


@router.post("/script", response_model=TextResponse)
@limiter.limit(DEFAULT_LIMIT)
async def generate_script_line(
    request: Request,
    body: ScriptRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    log = endpoint_logger("api/script")
    log.debug("Request received")
    try:
        return await ScriptService(gateway, settings).generate_line(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Script generation failed: {e}")
        raise InternalServerError("Script generation failed") from e


@router.post("/voice-summary", response_model=TextResponse)
@limiter.limit(DEFAULT_LIMIT)
async def generate_voice_summary(
    request: Request,
    body: VoiceSummaryRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    log = endpoint_logger("api/voice-summary")
    log.info(f"Request received | questions={len(body.questions)}")
    try:
        return await ScriptService(gateway, settings).generate_voice_summary(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Voice summary failed: {e}")
        raise InternalServerError("Voice summary failed") from e


@router.post("/coach", response_model=CoachResponse, response_model_exclude_none=True)
@limiter.limit(DEFAULT_LIMIT)
async def coach_reply(
    request: Request,
    body: CoachRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    """
    Answer a follow-up question about the interview, refusing off-topic chat
    """
    log = endpoint_logger("api/coach")
    log.info("Request received")
    try:
        return await CoachService(gateway, settings).reply(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Coach reply failed: {e}")
        raise InternalServerError("Unexpected server error") from e
