"""
Fact Check Service Module

Checks whether a user's correction to a candidate's technical answer is
factually accurate, using the OpenAI Responses API under a strict schema.

Author: @kcaparas1630
"""
from pydantic import ValidationError
from app.core.config import Settings
from app.core.logging_config import endpoint_logger
from app.core.secure_prompt_manager import SecurePromptManager, secure_prompt_manager
from app.errors.exceptions import UpstreamMalformedResponseError
from app.helper.response_normalizer import normalize_json_response
from app.schemas.feedback_schemas import FactCheckRequest, FactCheckResponse
from app.services.feedback.schema_builder import build_factcheck_schema
from app.services.upstream.llm_gateway import LLMGateway

log = endpoint_logger("api/factcheck")


class FactCheckService:
    def __init__(self, gateway: LLMGateway, settings: Settings, prompts: SecurePromptManager = secure_prompt_manager):
        self.gateway = gateway
        self.settings = settings
        self.prompts = prompts

    async def check(self, request: FactCheckRequest) -> FactCheckResponse:
        prompt = self.prompts.get_factcheck_prompt(request.question, request.answer, request.correction)
        data = await self.gateway.respond(
            model=self.settings.openai_model,
            input=prompt,
            timeout=self.settings.timeouts.factcheck,
            text_format=build_factcheck_schema(),
            log=log,
        )
        parsed = normalize_json_response(data, log=log)
        try:
            result = FactCheckResponse.model_validate(parsed)
        except ValidationError as e:
            log.error(f"Fact-check result has an unexpected shape: {e}")
            raise UpstreamMalformedResponseError("AI returned an unexpected response") from e

        log.info(f"Factcheck completed | is_correct={result.is_correct}")
        return result
