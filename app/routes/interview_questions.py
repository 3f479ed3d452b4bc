"""
Interview Question API Routes

Description:
This module defines the FastAPI routes that generate interview questions:
one role-based question, questions tailored to a resume and/or job
description, and a batch of questions for a role.

Returns:
- QuestionResponse, TailoredQuestionResponse or QuestionSetResponse.

Dependencies:
- fastapi: For creating the FastAPI application and defining routes.
- app.services.questions.question_service: For question generation.
- loguru: For logging information about the request and any errors that occur.

Author: @kcaparas1630

"""
from fastapi import APIRouter, Depends, HTTPException, Request
from app.core.config import Settings, get_settings
from app.core.logging_config import endpoint_logger
from app.core.route_limiters import limiter, DEFAULT_LIMIT
from app.errors.exceptions import InternalServerError
from app.schemas.question_schemas import (
    QuestionRequest,
    ResumeQuestionRequest,
    JobDescriptionQuestionRequest,
    QuestionSetRequest,
    QuestionResponse,
    TailoredQuestionResponse,
    QuestionSetResponse,
)
from app.services.questions.question_service import QuestionService
from app.services.upstream.llm_gateway import LLMGateway, get_llm_gateway

router = APIRouter(
    prefix="/api",
    tags=["interview-questions"],
    responses={404: {"description": "Not found"}}
)

GENERATION_FAILED = "Failed to generate question"


@router.post("/question", response_model=QuestionResponse)
@limiter.limit(DEFAULT_LIMIT)
async def generate_question(
    request: Request,
    body: QuestionRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    log = endpoint_logger("api/question")
    log.info(f"Request received | questionNumber={body.questionNumber}")
    try:
        return await QuestionService(gateway, settings).generate_question(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Failed to generate question: {e}")
        raise InternalServerError(GENERATION_FAILED) from e


@router.post("/resume-question", response_model=TailoredQuestionResponse)
@limiter.limit(DEFAULT_LIMIT)
async def generate_resume_question(
    request: Request,
    body: ResumeQuestionRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    log = endpoint_logger("api/resume-question")
    log.info(f"Request received | questionNumber={body.questionNumber}")
    try:
        return await QuestionService(gateway, settings).generate_resume_question(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Failed to generate question: {e}")
        raise InternalServerError(GENERATION_FAILED) from e


@router.post("/jobdesc-question", response_model=TailoredQuestionResponse)
@limiter.limit(DEFAULT_LIMIT)
async def generate_jobdesc_question(
    request: Request,
    body: JobDescriptionQuestionRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    log = endpoint_logger("api/jobdesc-question")
    log.info(f"Request received | questionNumber={body.questionNumber}")
    try:
        return await QuestionService(gateway, settings).generate_jobdesc_question(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Failed to generate question: {e}")
        raise InternalServerError(GENERATION_FAILED) from e


@router.post("/generate-questions", response_model=QuestionSetResponse)
@limiter.limit(DEFAULT_LIMIT)
async def generate_question_set(
    request: Request,
    body: QuestionSetRequest,
    gateway: LLMGateway = Depends(get_llm_gateway),
    settings: Settings = Depends(get_settings),
):
    log = endpoint_logger("api/generate-questions")
    log.info(f"Request received | count={body.count}")
    try:
        return await QuestionService(gateway, settings).generate_question_set(body)
    except HTTPException:
        raise
    except Exception as e:
        log.error(f"Failed to generate questions: {e}")
        raise InternalServerError("Failed to generate questions") from e
