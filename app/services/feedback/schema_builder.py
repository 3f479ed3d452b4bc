"""
Feedback Output Schema Builder

Builds the strict JSON-schema output formats passed to the OpenAI Responses
API so the model cannot drop fields or return the wrong number of questions.

Author: @kcaparas1630
"""
from typing import Any, Dict
from app.constants.categories import CATEGORIES

QUESTION_TEXT_FIELDS = (
    "best_part_quote",
    "best_part_explanation",
    "worst_part_quote",
    "worst_part_explanation",
    "what_went_well",
    "needs_improvement",
    "summary",
)

OVERALL_TEXT_FIELDS = (
    "what_went_well",
    "needs_improvement",
    "summary",
)


def _object_schema(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


def _category_properties() -> Dict[str, Any]:
    return {category: {"type": "number"} for category in CATEGORIES}


def build_question_schema() -> Dict[str, Any]:
    properties = _category_properties()
    properties.update({field: {"type": "string"} for field in QUESTION_TEXT_FIELDS})
    properties["confidence_score"] = {"type": "number"}
    return _object_schema(properties)


def build_overall_schema() -> Dict[str, Any]:
    properties = _category_properties()
    properties.update({field: {"type": "string"} for field in OVERALL_TEXT_FIELDS})
    return _object_schema(properties)


def build_feedback_schema(question_count: int) -> Dict[str, Any]:
    """
    Build the "interview_feedback" output format.

    Args:
        question_count (int): Number of questions in the request. The
            questions array is pinned to exactly this many items.

    Returns:
        dict: A Responses API text format of type "json_schema".
    """
    return {
        "type": "json_schema",
        "name": "interview_feedback",
        "strict": True,
        "schema": _object_schema({
            "questions": {
                "type": "array",
                "items": build_question_schema(),
                "minItems": question_count,
                "maxItems": question_count,
            },
            "overall": build_overall_schema(),
        }),
    }


def build_factcheck_schema() -> Dict[str, Any]:
    return {
        "type": "json_schema",
        "name": "factcheck_result",
        "strict": True,
        "schema": _object_schema({
            "is_correct": {"type": "boolean"},
            "result": {"type": "string"},
            "explanation": {"type": "string"},
        }),
    }
