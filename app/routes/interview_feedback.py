"""
Interview Feedback API Routes

Description:
This module defines the FastAPI routes that score a finished interview and
fact-check corrections to a candidate's answers.

Arguments:
- body: A FeedbackRequest or FactCheckRequest parsed from the JSON body.

Returns:
- FeedbackResult with per-question and overall feedback, or FactCheckResponse.

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- app.services.feedback: For the feedback and fact-check services.
- app.services.upstream.llm_gateway: For the provider gateway dependency.
- loguru: For logging information about the request and any errors that occur.

Author: @kcaparas1630

"""
from fastapi import APIRouter, Depends, HTTPException, Request
from app.core.config import Settings, get_settings
from app.core.logging_config import endpoint_logger
from app.core.route_limiters import limiter, DEFAULT_LIMIT
from app.errors.exceptions import InternalServerError
from app.schemas.feedback_schemas import FeedbackRequest, FeedbackResult, FactCheckRequest, FactCheckResponse
from app.services.feedback.feedback_service import FeedbackService
from app.services.feedback.factcheck_service import FactCheckService
from app.services.upstream.llm_gateway import LLMGateway, get_llm_gateway

router = APIRouter(
    prefix="/api",
    tags=["interview-feedback"],
    responses={404: {"description": "Not found"}}
)


@router.post("/feedback", response_model=FeedbackResult)
@limiter.limit(DEFAULT_LIMIT)
async def get_interview_feedback(
    request: Request,
    body: FeedbackRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    """
    Score every answer of a finished interview and the interview overall
    """
    log = endpoint_logger("api/feedback")
    log.info(f"Request received | questions={len(body.questions)}")
    try:
        service = FeedbackService(gateway, settings)
        return await service.generate_feedback(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Feedback failed: {e}")
        raise InternalServerError("Feedback failed") from e


@router.post("/factcheck", response_model=FactCheckResponse)
@limiter.limit(DEFAULT_LIMIT)
async def fact_check_correction(
    request: Request,
    body: FactCheckRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    """
    Decide whether a user's correction to a candidate answer is accurate
    """
    log = endpoint_logger("api/factcheck")
    log.info("Request received")
    try:
        service = FactCheckService(gateway, settings)
        return await service.check(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Factcheck failed: {e}")
        raise InternalServerError("Fact-check failed") from e
