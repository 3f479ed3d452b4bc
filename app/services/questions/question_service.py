"""
Question Generation Service Module

This module generates interview questions with Groq and OpenAI:

- generate_question: one behavioral question for a role, avoiding repeats
- generate_resume_question: one question tailored to a resume and job description
- generate_jobdesc_question: one question led by what the company does
- generate_question_set: a batch of mixed questions for a role

Dependencies:
- app.services.upstream.llm_gateway: For the bounded provider calls.
- app.core.secure_prompt_manager: For the prompt templates.
- app.helper.response_normalizer: For extracting and parsing model output.

Author: @kcaparas1630
"""
from typing import Any, List, Optional
from app.constants.regex_patterns import REGEX_PATTERNS
from app.core.ai_client_manager import GROQ, OPENAI
from app.core.config import Settings
from app.core.logging_config import endpoint_logger
from app.core.secure_prompt_manager import SecurePromptManager, secure_prompt_manager
from app.errors.exceptions import UpstreamMalformedResponseError
from app.helper.response_normalizer import extract_text, normalize_json_response, parse_json_text
from app.schemas.question_schemas import (
    QuestionRequest,
    ResumeQuestionRequest,
    JobDescriptionQuestionRequest,
    QuestionSetRequest,
    QuestionResponse,
    TailoredQuestionResponse,
    QuestionSetResponse,
)
from app.services.upstream.llm_gateway import LLMGateway

DEFAULT_ROLE = "software engineering intern"
JSON_OBJECT = {"type": "json_object"}


def clean_question(text: str) -> str:
    """
    Strip a "Sure! Here's one:" style preamble and any double quotes.

    Example:
        >>> clean_question('Here is your question: "Tell me about a bug you fixed."')
        'Tell me about a bug you fixed.'
    """
    text = (text or "").strip()
    text = REGEX_PATTERNS['question_preamble'].sub("", text, count=1)
    return text.replace('"', "").strip()


def non_blank_questions(previous: Optional[List[str]]) -> List[str]:
    return [question for question in previous or [] if question and question.strip()]


def format_previous_questions(previous: Optional[List[str]]) -> str:
    """Numbered "do NOT repeat" block for tailored prompts, or "" when there are none."""
    previous = non_blank_questions(previous)
    if not previous:
        return ""
    lines = "\n".join(f"{i + 1}. {question}" for i, question in enumerate(previous))
    return f"\n\nPrevious questions already asked (do NOT repeat these):\n{lines}"


def _as_text(value: Any, default: str = "") -> str:
    if not value:
        return default
    return value if isinstance(value, str) else str(value)


class QuestionService:
    """
    Service class for generating interview questions.
    """

    def __init__(self, gateway: LLMGateway, settings: Settings, prompts: SecurePromptManager = secure_prompt_manager):
        self.gateway = gateway
        self.settings = settings
        self.prompts = prompts

    async def generate_question(self, request: QuestionRequest) -> QuestionResponse:
        """
        Generate one behavioral question for a role.

        Args:
            request (QuestionRequest): Role and questions already asked.

        Returns:
            QuestionResponse: The cleaned question text.
        """
        log = endpoint_logger("api/question")
        previous = "\n".join(non_blank_questions(request.previousQuestions)) or "None"
        prompt = self.prompts.render(
            "question",
            role=(request.role or "").strip() or DEFAULT_ROLE,
            previous_questions=previous,
        )
        data = await self.gateway.chat(
            GROQ,
            model=self.settings.groq_question_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.8,
            max_tokens=250,
            timeout=self.settings.timeouts.question,
            log=log,
        )
        question = clean_question(extract_text(data))
        log.info(f"Question generated | questionNumber={request.questionNumber} questionLength={len(question)}")
        return QuestionResponse(question=question)

    async def _tailored_question(self, prompt: str, timeout: float, log) -> TailoredQuestionResponse:
        data = await self.gateway.chat(
            GROQ,
            model=self.settings.groq_question_model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.7,
            max_tokens=300,
            response_format=JSON_OBJECT,
            timeout=timeout,
            log=log,
        )
        parsed = normalize_json_response(data, log=log)
        if not isinstance(parsed, dict):
            log.error(f"Question reply is not a JSON object: {type(parsed).__name__}")
            raise UpstreamMalformedResponseError()
        return TailoredQuestionResponse(
            question=_as_text(parsed.get("question")),
            type=_as_text(parsed.get("type"), "behavioral"),
            focus=_as_text(parsed.get("focus")),
        )

    async def generate_resume_question(self, request: ResumeQuestionRequest) -> TailoredQuestionResponse:
        """Generate one question grounded in both the resume and the job description."""
        log = endpoint_logger("api/resume-question")
        prompt = self.prompts.render(
            "resume_question",
            resume_text=request.resumeText,
            job_description=request.jobDescription,
            previous_questions=format_previous_questions(request.previousQuestions),
            question_number=request.questionNumber or 1,
        )
        result = await self._tailored_question(prompt, self.settings.timeouts.resume_question, log)
        log.info(f"Resume question generated | focus={result.focus!r}")
        return result

    async def generate_jobdesc_question(self, request: JobDescriptionQuestionRequest) -> TailoredQuestionResponse:
        """Generate one question that opens with what the hiring company does."""
        log = endpoint_logger("api/jobdesc-question")
        resume_block = ""
        if request.resumeText and request.resumeText.strip():
            resume_block = f"\nCandidate Resume (for context only):\n{request.resumeText[:4000]}"
        name_instruction = ""
        if request.candidateName and request.candidateName.strip():
            name_instruction = (
                f"\nThe candidate's name is {request.candidateName.strip()}. "
                "Address them by name naturally in the question."
            )
        prompt = self.prompts.render(
            "jobdesc_question",
            job_description=request.jobDescription,
            resume_block=resume_block,
            previous_questions=format_previous_questions(request.previousQuestions),
            name_instruction=name_instruction,
            question_number=request.questionNumber or 1,
        )
        result = await self._tailored_question(prompt, self.settings.timeouts.jobdesc_question, log)
        log.info(f"Job description question generated | focus={result.focus!r}")
        return result

    async def generate_question_set(self, request: QuestionSetRequest) -> QuestionSetResponse:
        """Generate `count` mixed behavioral/technical questions for a role in one call."""
        log = endpoint_logger("api/generate-questions")
        data = await self.gateway.chat(
            OPENAI,
            model=self.settings.openai_model,
            messages=[
                {"role": "system", "content": self.prompts.render("question_set_system")},
                {"role": "user", "content": self.prompts.render("question_set", count=request.count, role=request.role)},
            ],
            timeout=self.settings.timeouts.question_set,
            log=log,
        )
        # An empty reply means no questions
        parsed = parse_json_text(extract_text(data) or "[]", log=log)
        if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
            log.error(f"Question set is not a list of strings: {type(parsed).__name__}")
            raise UpstreamMalformedResponseError()
        log.info(f"Question set generated | count={len(parsed)}")
        return QuestionSetResponse(questions=parsed)
