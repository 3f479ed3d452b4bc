"""
Description:
Average the six rubric categories into a single score.

A category the model left out (or returned as null / non-numeric) counts as 0
and stays in the denominator, so one missing category caps the mean at 83.3.

Dependencies:
- decimal: For half-up rounding on the exact value of the mean.
- app.constants.categories: For the fixed category list.

Author: @kcaparas1630

"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping
from app.constants.categories import CATEGORIES


def coerce_score(value: Any) -> float:
    """Coerce one category value to a float; anything unusable becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


def round_one_decimal(value: float) -> float:
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def category_mean(scores: Mapping[str, Any]) -> float:
    """
    Mean of the six category values, rounded to one decimal.

    Args:
        scores: A mapping holding some or all of the rubric categories. Extra
            keys are ignored.

    Returns:
        float: The mean, e.g. 100.0 for six perfect scores.
    """
    if not isinstance(scores, Mapping):
        scores = {}
    total = sum(coerce_score(scores.get(category)) for category in CATEGORIES)
    return round_one_decimal(total / len(CATEGORIES))
