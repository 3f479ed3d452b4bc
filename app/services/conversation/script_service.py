"""
Interviewer Script Service Module

Generates the short spoken lines of the virtual interviewer: scripted turns
driven by a caller-supplied system prompt and directive, and the one- or
two-sentence spoken debrief read aloud after feedback is ready.

Author: @kcaparas1630
"""
import math
from app.core.ai_client_manager import GROQ
from app.core.config import Settings
from app.core.logging_config import endpoint_logger
from app.core.secure_prompt_manager import SecurePromptManager, secure_prompt_manager
from app.helper.response_normalizer import extract_text
from app.schemas.conversation_schemas import ScriptRequest, VoiceSummaryRequest, TextResponse
from app.services.upstream.llm_gateway import LLMGateway


def round_percent(value: float) -> int:
    """Round half up to a whole percentage, as the browser displays it."""
    return int(math.floor(value + 0.5))


def format_question_summaries(questions) -> str:
    return "\n".join(
        f"Q{i + 1}: score {round_percent(q.score)}% — {q.summary}"
        for i, q in enumerate(questions)
    )


class ScriptService:
    def __init__(self, gateway: LLMGateway, settings: Settings, prompts: SecurePromptManager = secure_prompt_manager):
        self.gateway = gateway
        self.settings = settings
        self.prompts = prompts

    async def generate_line(self, request: ScriptRequest) -> TextResponse:
        """
        Generate one interviewer line.

        The message list is the system prompt, then the conversation so far
        (when given) as a user turn, then the directive.
        """
        log = endpoint_logger("api/script")
        messages = [{"role": "system", "content": request.systemPrompt}]
        if request.conversationContext and request.conversationContext.strip():
            messages.append({
                "role": "user",
                "content": self.prompts.render("script_context", conversation_context=request.conversationContext),
            })
        messages.append({"role": "user", "content": request.directive})

        data = await self.gateway.chat(
            GROQ,
            model=self.settings.groq_question_model,
            messages=messages,
            temperature=0.8,
            max_tokens=150,
            timeout=self.settings.timeouts.script,
            log=log,
        )
        text = extract_text(data)
        log.debug(f"Script line generated | chars={len(text)}")
        return TextResponse(text=text)

    async def generate_voice_summary(self, request: VoiceSummaryRequest) -> TextResponse:
        """Generate the spoken debrief for a finished interview."""
        log = endpoint_logger("api/voice-summary")
        prompt = self.prompts.render(
            "voice_summary",
            overall_score=round_percent(request.overall.score),
            what_went_well=request.overall.what_went_well,
            needs_improvement=request.overall.needs_improvement,
            question_summaries=format_question_summaries(request.questions),
        )
        data = await self.gateway.chat(
            GROQ,
            model=self.settings.groq_question_model,
            messages=[
                {"role": "system", "content": self.prompts.render("voice_summary_system")},
                {"role": "user", "content": prompt},
            ],
            temperature=0.7,
            max_tokens=100,
            timeout=self.settings.timeouts.voice_summary,
            log=log,
        )
        text = extract_text(data)
        log.info(f"Voice summary generated | questions={len(request.questions)}")
        return TextResponse(text=text)
