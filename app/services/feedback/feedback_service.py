"""
Interview Feedback Service Module

This module turns a finished interview (questions plus the candidate's
answers) into scored, structured feedback. The OpenAI Responses API is asked
for six rubric scores and written feedback per question and for the interview
overall, under a strict JSON schema; the reply is then validated and each
block's score is computed locally as the mean of its six categories.

Dependencies:
- app.services.upstream.llm_gateway: For the bounded OpenAI call.
- app.core.secure_prompt_manager: For the feedback prompt.
- app.services.feedback.schema_builder: For the structured output format.
- app.helper.response_normalizer: For extracting and parsing the model's JSON.
- app.helper.score_aggregator: For category means.
- loguru: For logging.

Author: @kcaparas1630
"""
from typing import Any, Dict, List, Optional
from app.core.config import Settings
from app.core.logging_config import endpoint_logger
from app.core.secure_prompt_manager import (
    FEEDBACK_TRANSCRIPT_MAX_CHARS,
    SecurePromptManager,
    format_interview_transcript,
    secure_prompt_manager,
)
from app.constants.categories import CATEGORIES
from app.errors.exceptions import ClientInputError, IncompleteFeedbackError
from app.helper.response_normalizer import normalize_json_response
from app.helper.score_aggregator import category_mean, coerce_score
from app.schemas.feedback_schemas import FeedbackRequest, FeedbackResult, QuestionFeedback, OverallFeedback
from app.services.feedback.schema_builder import build_feedback_schema, QUESTION_TEXT_FIELDS, OVERALL_TEXT_FIELDS
from app.services.upstream.llm_gateway import LLMGateway

log = endpoint_logger("api/feedback")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_optional_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def build_question_feedback(raw: Dict[str, Any]) -> QuestionFeedback:
    """Reduce one raw question block to its mean score and text fields."""
    return QuestionFeedback(
        score=category_mean(raw),
        confidence_score=_as_optional_number(raw.get("confidence_score")),
        **{field: _as_text(raw.get(field)) for field in QUESTION_TEXT_FIELDS},
    )


def build_overall_feedback(raw: Dict[str, Any]) -> OverallFeedback:
    """Keep the overall category values as returned and add their mean as `score`."""
    categories = {
        category: coerce_score(raw[category]) if category in raw and raw[category] is not None else None
        for category in CATEGORIES
    }
    return OverallFeedback(
        score=category_mean(raw),
        **categories,
        **{field: _as_text(raw.get(field)) for field in OVERALL_TEXT_FIELDS},
    )


def build_feedback_result(raw: Any, expected_count: int) -> FeedbackResult:
    """
    Validate the model's feedback and compute scores.

    Args:
        raw: Parsed JSON returned by the model.
        expected_count (int): Number of questions in the request.

    Returns:
        FeedbackResult: One QuestionFeedback per question plus the overall block.

    Raises:
        IncompleteFeedbackError: If the questions array is missing, has the
            wrong length, holds non-object items, or the overall block is missing.
    """
    if not isinstance(raw, dict):
        log.error(f"Feedback is not a JSON object: {type(raw).__name__}")
        raise IncompleteFeedbackError(expected=expected_count)

    questions = raw.get("questions")
    received = len(questions) if isinstance(questions, list) else None
    if received != expected_count:
        log.error(f"Invalid question count | expected={expected_count} got={received}")
        raise IncompleteFeedbackError(expected=expected_count, received=received)

    if not all(isinstance(item, dict) for item in questions):
        log.error("Feedback questions array contains non-object items")
        raise IncompleteFeedbackError(expected=expected_count, received=received)

    overall = raw.get("overall")
    if not isinstance(overall, dict):
        log.error("Feedback is missing the overall block")
        raise IncompleteFeedbackError(expected=expected_count, received=received)

    question_feedback: List[QuestionFeedback] = [build_question_feedback(item) for item in questions]
    return FeedbackResult(questions=question_feedback, overall=build_overall_feedback(overall))


class FeedbackService:
    """
    Service class for scoring a whole interview.
    """

    def __init__(self, gateway: LLMGateway, settings: Settings, prompts: SecurePromptManager = secure_prompt_manager):
        self.gateway = gateway
        self.settings = settings
        self.prompts = prompts

    async def generate_feedback(self, request: FeedbackRequest) -> FeedbackResult:
        """
        Score every answer of an interview and the interview overall.

        Args:
            request (FeedbackRequest): Parallel questions and answers, plus an
                optional resume and job description.

        Returns:
            FeedbackResult: Normalized feedback with locally computed scores.

        Raises:
            ClientInputError: The transcript is longer than the model is sent.
        """
        question_count = len(request.questions)
        transcript_length = len(format_interview_transcript(request.questions, request.answers))
        if transcript_length > FEEDBACK_TRANSCRIPT_MAX_CHARS:
            log.warning(
                f"Feedback transcript too long | questions={question_count} "
                f"chars={transcript_length} limit={FEEDBACK_TRANSCRIPT_MAX_CHARS}"
            )
            raise ClientInputError("Interview is too long to score; shorten the answers and retry")

        prompt = self.prompts.get_feedback_prompt(
            request.questions,
            request.answers,
            resume_text=request.resumeText,
            job_description=request.jobDescription,
        )
        log.debug(f"Feedback prompt built | questions={question_count} chars={len(prompt)}")

        data = await self.gateway.respond(
            model=self.settings.openai_model,
            input=prompt,
            timeout=self.settings.timeouts.feedback,
            text_format=build_feedback_schema(question_count),
            log=log,
        )
        raw = normalize_json_response(data, log=log)
        result = build_feedback_result(raw, question_count)

        log.info(f"Feedback generated | questionCount={len(result.questions)} overall={result.overall.score}")
        return result
