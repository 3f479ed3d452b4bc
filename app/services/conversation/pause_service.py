"""
Pause Analysis Service Module

When a candidate goes quiet for a few seconds the browser asks whether they
have finished. A small, fast Groq model reads the transcript and answers with
one of three verdicts; anything else it says is treated as "ask".

Author: @kcaparas1630
"""
from app.constants.categories import PAUSE_VERDICTS, DEFAULT_PAUSE_VERDICT
from app.core.ai_client_manager import GROQ
from app.core.config import Settings
from app.core.logging_config import endpoint_logger
from app.core.secure_prompt_manager import SecurePromptManager, secure_prompt_manager
from app.helper.response_normalizer import extract_text, parse_json_text
from app.schemas.conversation_schemas import PauseRequest, PauseResponse
from app.services.upstream.llm_gateway import LLMGateway

log = endpoint_logger("api/pause")


def normalize_verdict(parsed) -> str:
    """Return the model's verdict if it is one of the known values, else "ask"."""
    verdict = parsed.get("verdict") if isinstance(parsed, dict) else None
    if verdict in PAUSE_VERDICTS:
        return verdict
    return DEFAULT_PAUSE_VERDICT


class PauseService:
    def __init__(self, gateway: LLMGateway, settings: Settings, prompts: SecurePromptManager = secure_prompt_manager):
        self.gateway = gateway
        self.settings = settings
        self.prompts = prompts

    async def analyze(self, request: PauseRequest) -> PauseResponse:
        data = await self.gateway.chat(
            GROQ,
            model=self.settings.groq_fast_model,
            messages=[
                {"role": "system", "content": self.prompts.render("pause_system")},
                {"role": "user", "content": self.prompts.render("pause", transcript=request.transcript)},
            ],
            temperature=0,
            max_tokens=20,
            response_format={"type": "json_object"},
            timeout=self.settings.timeouts.pause,
            log=log,
        )
        parsed = parse_json_text(extract_text(data) or "{}", log=log)
        verdict = normalize_verdict(parsed)
        log.debug(f"Pause verdict | raw={parsed!r} verdict={verdict}")
        return PauseResponse(verdict=verdict)
