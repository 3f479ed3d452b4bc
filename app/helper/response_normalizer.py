"""
Description:
Normalize raw provider responses into parsed JSON.

Providers answer in one of a few known shapes. Each shape has its own
extraction function, and extract_text tries them in a fixed order:

1. OUTPUT_TEXT        - {"output_text": "..."}
2. RESPONSES_CONTENT  - {"output": [{"content": [{"text": "..."}]}]}
3. CHAT_CHOICE        - {"choices": [{"message": {"content": "..."}}]}

The first shape that yields a string wins; if none match the text is "".

Dependencies:
- app.constants.regex_patterns: For the code-fence and JSON-object patterns.
- app.errors.exceptions: For the malformed-response error.
- loguru: For diagnostics when parsing fails.

Author: @kcaparas1630

"""
import json
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple
from loguru import logger
from app.constants.regex_patterns import REGEX_PATTERNS
from app.errors.exceptions import UpstreamMalformedResponseError

DIAGNOSTIC_PREVIEW_CHARS = 300


class ResponseShape(str, Enum):
    OUTPUT_TEXT = "output_text"
    RESPONSES_CONTENT = "responses_content"
    CHAT_CHOICE = "chat_choice"


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def _extract_output_text(data: Dict[str, Any]) -> Optional[str]:
    value = data.get("output_text")
    return value if isinstance(value, str) else None


def _extract_responses_content(data: Dict[str, Any]) -> Optional[str]:
    item = _first(data.get("output"))
    if not isinstance(item, dict):
        return None
    part = _first(item.get("content"))
    if not isinstance(part, dict):
        return None
    value = part.get("text")
    return value if isinstance(value, str) else None


def _extract_chat_choice(data: Dict[str, Any]) -> Optional[str]:
    choice = _first(data.get("choices"))
    if not isinstance(choice, dict):
        return None
    message = choice.get("message")
    if not isinstance(message, dict):
        return None
    value = message.get("content")
    return value if isinstance(value, str) else None


EXTRACTORS: Tuple[Tuple[ResponseShape, Callable[[Dict[str, Any]], Optional[str]]], ...] = (
    (ResponseShape.OUTPUT_TEXT, _extract_output_text),
    (ResponseShape.RESPONSES_CONTENT, _extract_responses_content),
    (ResponseShape.CHAT_CHOICE, _extract_chat_choice),
)


def detect_shape(data: Any) -> Optional[ResponseShape]:
    """Return the first known shape that yields text for this response, if any."""
    if not isinstance(data, dict):
        return None
    for shape, extractor in EXTRACTORS:
        if extractor(data) is not None:
            return shape
    return None


def extract_text(data: Any) -> str:
    """
    Pull the model's text payload out of a raw provider response.

    Args:
        data: Decoded JSON body returned by the provider.

    Returns:
        str: The text of the first matching shape, stripped, or "" when no
             known shape matches.
    """
    if not isinstance(data, dict):
        return ""
    for _, extractor in EXTRACTORS:
        value = extractor(data)
        if value is not None:
            return value.strip()
    return ""


def strip_code_fences(text: str) -> str:
    """
    Remove a leading ```json / ``` fence and a trailing ``` fence.

    Example:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    if not text:
        return ""
    text = text.strip()
    text = REGEX_PATTERNS['leading_fence'].sub("", text, count=1)
    text = REGEX_PATTERNS['trailing_fence'].sub("", text, count=1)
    return text.strip()


def parse_json_text(text: str, log=logger) -> Any:
    """
    Parse model text as JSON after stripping code fences.

    Raises:
        UpstreamMalformedResponseError: If the text is not valid JSON. Only the
        first 300 characters are logged; nothing is returned to the caller.
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, TypeError) as e:
        log.error(f"JSON parse failed: {e} | rawText={cleaned[:DIAGNOSTIC_PREVIEW_CHARS]!r}")
        raise UpstreamMalformedResponseError() from e


def normalize_json_response(data: Any, log=logger) -> Any:
    """Extract the text payload from a provider response and parse it as JSON."""
    return parse_json_text(extract_text(data), log=log)


def parse_maybe_json(text: Any) -> Optional[Any]:
    """
    Lenient JSON parsing for short classifier replies.

    Tries the whole text first, then the outermost {...} span. Returns None
    instead of raising when neither parses.
    """
    if not text or not isinstance(text, str):
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        match = REGEX_PATTERNS['json_object'].search(text)
        if not match:
            return None
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError:
            return None
