"""
LLM Gateway Module

Single entry point for text-generation calls. Services describe the payload
(model, messages or input, output format) and the gateway resolves the
provider client, runs the call through bounded_call, and hands back the raw
response as a plain dict for the response normalizer.

Two call styles are supported:
- chat(): chat.completions on OpenAI or Groq, answers in the CHAT_CHOICE shape
- respond(): the OpenAI Responses API, answers in the OUTPUT_TEXT /
  RESPONSES_CONTENT shapes

Dependencies:
- openai: For the AsyncOpenAI clients.
- app.core.ai_client_manager: For per-provider clients.
- app.services.upstream.bounded_call: For the deadline and error classification.

Author: @kcaparas1630
"""
from typing import Any, Dict, List, Optional
from loguru import logger
from app.core.ai_client_manager import AIClientManager, PROVIDER_LABELS, OPENAI, get_ai_client_manager
from app.services.upstream.bounded_call import bounded_call


class LLMGateway:
    def __init__(self, manager: AIClientManager):
        self.manager = manager

    async def chat(
        self,
        provider: str,
        *,
        model: str,
        messages: List[Dict[str, Any]],
        timeout: float,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        response_format: Optional[Dict[str, Any]] = None,
        log=logger,
    ) -> Dict[str, Any]:
        """
        Run one chat completion and return the raw response body.

        Raises:
            ConfigurationError: The provider's key is not configured.
            UpstreamTimeoutError: The call exceeded `timeout`.
            UpstreamError: The provider returned a failure status.
        """
        client = self.manager.get_client(provider)
        params: Dict[str, Any] = {"model": model, "messages": messages, "timeout": timeout}
        if temperature is not None:
            params["temperature"] = temperature
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        if response_format is not None:
            params["response_format"] = response_format

        log.debug(f"Calling {PROVIDER_LABELS[provider]} chat model {model}")
        response = await bounded_call(
            lambda: client.chat.completions.create(**params),
            timeout=timeout,
            provider=PROVIDER_LABELS[provider],
            log=log,
        )
        return response.model_dump()

    async def respond(
        self,
        *,
        model: str,
        input: str,
        timeout: float,
        text_format: Optional[Dict[str, Any]] = None,
        log=logger,
    ) -> Dict[str, Any]:
        """
        Run one OpenAI Responses call and return the raw response body.

        The SDK's aggregated output_text is copied into the body when present
        so the normalizer can read it before falling back to output[0].
        """
        client = self.manager.get_client(OPENAI)
        params: Dict[str, Any] = {"model": model, "input": input, "timeout": timeout}
        if text_format is not None:
            params["text"] = {"format": text_format}

        log.debug(f"Calling OpenAI responses model {model}")
        response = await bounded_call(
            lambda: client.responses.create(**params),
            timeout=timeout,
            provider=PROVIDER_LABELS[OPENAI],
            log=log,
        )
        data = response.model_dump()
        output_text = getattr(response, "output_text", None)
        if isinstance(output_text, str) and output_text:
            data["output_text"] = output_text
        return data


def get_llm_gateway() -> LLMGateway:
    """FastAPI dependency returning the gateway bound to the shared client manager."""
    return LLMGateway(get_ai_client_manager())
