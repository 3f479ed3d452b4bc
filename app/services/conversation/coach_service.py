"""
Interview Coach Chat Service Module

This module answers follow-up questions from a candidate about the interview
they just finished. It keeps the chat on topic in two stages:

1. A rule-based check looks for interview vocabulary, word overlap with the
   interview context, and short follow-ups that refer back to the answer.
2. Only when the rules are not confident, a Groq relevance gate classifies the
   latest message. Off-topic messages get a fixed refusal instead of a reply.

Relevant messages are answered by the coaching prompt, grounded in the
interview context block built from the request.

Dependencies:
- app.services.upstream.llm_gateway: For the bounded Groq calls.
- app.core.secure_prompt_manager: For the relevance and coaching prompts.
- app.helper.response_normalizer: For lenient JSON parsing of the gate's reply.

Author: @kcaparas1630
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set
from app.constants.regex_patterns import REGEX_PATTERNS
from app.core.ai_client_manager import GROQ
from app.core.config import Settings
from app.core.logging_config import endpoint_logger
from app.core.secure_prompt_manager import SecurePromptManager, secure_prompt_manager
from app.errors.exceptions import ClientInputError, UpstreamMalformedResponseError
from app.helper.response_normalizer import extract_text, parse_maybe_json
from app.schemas.conversation_schemas import CoachRequest, CoachResponse
from app.services.upstream.llm_gateway import LLMGateway

log = endpoint_logger("api/coach")

OFF_TOPIC_REPLY = (
    "I can only discuss your recent interview response, feedback, and related interview coaching topics."
)

STOP_WORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has", "have",
    "how", "i", "in", "is", "it", "my", "of", "on", "or", "that", "the", "this",
    "to", "was", "we", "what", "when", "where", "who", "why", "with", "you", "your",
})

MAX_MESSAGE_CHARS = 2500
MAX_TRANSCRIPT_CHARS = 6000
SHORT_FOLLOW_UP_CHARS = 90
RELEVANCE_WINDOW = 6


def _clean(value: Any, max_length: int) -> str:
    return value.strip()[:max_length] if isinstance(value, str) else ""


def sanitize_messages(messages: Any) -> List[Dict[str, str]]:
    """Keep user/assistant turns with non-empty string content, trimmed and capped."""
    if not isinstance(messages, list):
        return []
    cleaned = []
    for message in messages:
        if not isinstance(message, dict) or message.get("role") not in ("user", "assistant"):
            continue
        content = _clean(message.get("content"), MAX_MESSAGE_CHARS)
        if content:
            cleaned.append({"role": message["role"], "content": content})
    return cleaned


def sanitize_string_list(values: Any, max_items: int = 12, max_length: int = 300) -> List[str]:
    if not isinstance(values, list):
        return []
    items = [value.strip() for value in values if isinstance(value, str)]
    return [item[:max_length] for item in items if item][:max_items]


def _clamp_percent(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != value:
        return 0
    if value in (float("inf"), float("-inf")):
        return 0
    return max(0, min(100, math.floor(value + 0.5)))


def sanitize_category_feedback(values: Any) -> List[Dict[str, Any]]:
    """Normalize the browser's per-category rationale cards; drops items without key or label."""
    if not isinstance(values, list):
        return []
    cleaned = []
    for item in values:
        if not isinstance(item, dict):
            continue
        level = item.get("level")
        entry = {
            "key": item["key"].strip().lower() if isinstance(item.get("key"), str) else "",
            "label": _clean(item.get("label"), 40),
            "percent": _clamp_percent(item.get("percent")),
            "level": level.strip()[:40] if isinstance(level, str) else "Pending",
            "explanation": _clean(item.get("explanation"), 400),
        }
        if entry["key"] and entry["label"]:
            cleaned.append(entry)
    return cleaned[:12]


def extract_tokens(text: Any) -> List[str]:
    if not text or not isinstance(text, str):
        return []
    normalized = REGEX_PATTERNS['non_alphanumeric'].sub(" ", text.lower())
    return [
        token for token in REGEX_PATTERNS['whitespace'].split(normalized)
        if len(token) >= 3 and token not in STOP_WORDS
    ]


def has_token_overlap(message: str, context_tokens: Set[str]) -> bool:
    if not context_tokens:
        return False
    return any(token in context_tokens for token in extract_tokens(message))


@dataclass
class RelevanceVerdict:
    allowed: bool
    confident: bool


def classify_relevance_by_rules(latest_user_message: str, context_tokens: Set[str], messages: List[Dict[str, str]]) -> RelevanceVerdict:
    """
    Decide relevance without a model call.

    A message is confidently relevant when it uses interview vocabulary or
    shares words with the interview context. Short follow-ups that point back
    at "it"/"this"/"that answer" are allowed but not confident.
    """
    if not latest_user_message:
        return RelevanceVerdict(allowed=False, confident=False)

    has_interview_language = bool(REGEX_PATTERNS['interview_terms'].search(latest_user_message))
    overlaps_context = has_token_overlap(latest_user_message, context_tokens)
    is_short_contextual_follow_up = (
        len(messages) >= 2
        and len(latest_user_message) <= SHORT_FOLLOW_UP_CHARS
        and bool(REGEX_PATTERNS['contextual_reference'].search(latest_user_message.lower()))
    )
    return RelevanceVerdict(
        allowed=has_interview_language or overlaps_context or is_short_contextual_follow_up,
        confident=has_interview_language or overlaps_context,
    )


def normalize_is_relevant(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes")
    if isinstance(value, (int, float)):
        return value > 0
    return False


def build_interview_context(
    question: str = "",
    transcript: str = "",
    suggestions: Optional[List[str]] = None,
    follow_up: str = "",
    score_summary: Optional[List[str]] = None,
    category_feedback: Optional[List[Dict[str, Any]]] = None,
    overall_summary: str = "",
    role: str = "",
    difficulty: str = "",
) -> str:
    """Render everything known about the interview as "Label: value" lines."""
    if category_feedback:
        category_lines = " | ".join(
            f"{item['label']}: {item['percent']}% ({item['level']})"
            + (f" | rationale: {item['explanation']}" if item["explanation"] else "")
            for item in category_feedback
        )
    else:
        category_lines = "N/A"
    return "\n".join([
        f"Role: {role or 'N/A'}",
        f"Difficulty: {difficulty or 'N/A'}",
        f"Question: {question or 'N/A'}",
        f"Transcript: {(transcript or 'N/A')[:MAX_TRANSCRIPT_CHARS]}",
        f"Category feedback: {category_lines}",
        f"Overall summary: {overall_summary or 'N/A'}",
        f"Suggestions: {' | '.join(suggestions) if suggestions is not None else 'N/A'}",
        f"Follow-up prompt: {follow_up or 'N/A'}",
        f"Score summary: {' | '.join(score_summary) if score_summary is not None else 'N/A'}",
    ])


class CoachService:
    """
    Service class for the post-interview coaching chat.
    """

    def __init__(self, gateway: LLMGateway, settings: Settings, prompts: SecurePromptManager = secure_prompt_manager):
        self.gateway = gateway
        self.settings = settings
        self.prompts = prompts

    async def _is_relevant(self, context_block: str, messages: List[Dict[str, str]], latest_user_message: str) -> bool:
        conversation_window = "\n".join(
            f"{message['role'].upper()}: {message['content']}"
            for message in messages[-RELEVANCE_WINDOW:]
        )
        data = await self.gateway.chat(
            GROQ,
            model=self.settings.groq_fast_model,
            messages=[
                {"role": "system", "content": self.prompts.render("coach_relevance_system")},
                {"role": "user", "content": self.prompts.render(
                    "coach_relevance",
                    context_block=context_block,
                    conversation_window=conversation_window,
                    latest_user_message=latest_user_message,
                )},
            ],
            temperature=0,
            max_tokens=120,
            timeout=self.settings.timeouts.coach,
            log=log,
        )
        verdict = parse_maybe_json(extract_text(data))
        is_relevant = normalize_is_relevant(verdict.get("isRelevant") if isinstance(verdict, dict) else None)
        log.debug(f"Relevance gate | isRelevant={is_relevant}")
        return is_relevant

    async def reply(self, request: CoachRequest) -> CoachResponse:
        """
        Answer the latest user message in the coaching chat.

        Args:
            request (CoachRequest): Chat history plus the interview context.

        Returns:
            CoachResponse: The coaching reply, or the fixed refusal with
            blocked=True when the message is off topic.

        Raises:
            ClientInputError: If there are no usable messages.
            UpstreamMalformedResponseError: If the coach returns an empty reply.
        """
        messages = sanitize_messages(request.messages)
        if not messages:
            raise ClientInputError("No messages provided")

        latest_user_message = next(
            (message["content"] for message in reversed(messages) if message["role"] == "user"),
            "",
        )
        if not latest_user_message:
            raise ClientInputError("No user message provided")

        context_block = build_interview_context(
            question=request.question or "",
            transcript=request.transcript or "",
            suggestions=sanitize_string_list(request.suggestions) if request.suggestions is not None else None,
            follow_up=request.followUp or "",
            score_summary=sanitize_string_list(request.scoreSummary) if request.scoreSummary is not None else None,
            category_feedback=sanitize_category_feedback(request.categoryFeedback),
            overall_summary=_clean(request.overallSummary, 800),
            role=_clean(request.role, 40),
            difficulty=_clean(request.difficulty, 40),
        )
        context_tokens = set(extract_tokens(context_block))

        verdict = classify_relevance_by_rules(latest_user_message, context_tokens, messages)
        if not verdict.confident:
            if not await self._is_relevant(context_block, messages, latest_user_message):
                log.info("Off-topic message blocked")
                return CoachResponse(reply=OFF_TOPIC_REPLY, blocked=True)

        data = await self.gateway.chat(
            GROQ,
            model=self.settings.groq_fast_model,
            messages=[
                {"role": "system", "content": self.prompts.render("coach_system", off_topic_reply=OFF_TOPIC_REPLY)},
                {"role": "system", "content": self.prompts.render("coach_context", context_block=context_block)},
                *messages,
            ],
            temperature=0.6,
            max_tokens=500,
            timeout=self.settings.timeouts.coach,
            log=log,
        )
        reply = extract_text(data)
        if not reply:
            log.error("Coach returned an empty reply")
            raise UpstreamMalformedResponseError("No reply returned by Groq")

        log.info(f"Coach replied | chars={len(reply)}")
        return CoachResponse(reply=reply)
