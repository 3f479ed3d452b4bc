"""
Test Score Aggregator Module

Author: @kcaparas1630
"""

import pytest
from app.constants.categories import CATEGORIES
from app.helper.score_aggregator import category_mean, coerce_score, round_one_decimal

PERFECT = {
    "response_organization": 100,
    "technical_knowledge": 100,
    "problem_solving": 100,
    "position_application": 100,
    "timing": 100,
    "personability": 100,
}

class TestCategoryMean:
    """Test the mean of the six rubric categories."""

    def test_all_perfect(self):
        assert category_mean(PERFECT) == 100.0

    def test_missing_category_counts_as_zero(self):
        """Absent categories stay in the denominator."""
        scores = dict(PERFECT)
        del scores["timing"]
        assert category_mean(scores) == 83.3

    def test_non_numeric_counts_as_zero(self):
        scores = dict(PERFECT, timing="n/a", personability=None)
        assert category_mean(scores) == 66.7

    def test_numeric_strings_are_accepted(self):
        scores = dict(PERFECT, timing="70")
        assert category_mean(scores) == 95.0

    def test_extra_keys_ignored(self):
        scores = dict(PERFECT, confidence_score=0, summary="text")
        assert category_mean(scores) == 100.0

    def test_empty_and_invalid_input(self):
        assert category_mean({}) == 0.0
        assert category_mean(None) == 0.0

    def test_rounds_to_one_decimal(self):
        scores = {
            "response_organization": 80,
            "technical_knowledge": 75,
            "problem_solving": 70,
            "position_application": 65,
            "timing": 90,
            "personability": 85,
        }
        assert category_mean(scores) == 77.5

    def test_all_zero(self):
        assert category_mean(dict.fromkeys(CATEGORIES, 0)) == 0.0

    def test_key_order_does_not_matter(self):
        scores = {
            "personability": 12.7,
            "timing": 99.9,
            "response_organization": 41.3,
            "position_application": 0.1,
            "technical_knowledge": 66.6,
            "problem_solving": 58.05,
        }
        reordered = dict(reversed(list(scores.items())))
        assert list(reordered) != list(scores)
        assert category_mean(scores) == category_mean(reordered) == 46.4

class TestHelpers:
    """Test score coercion and rounding."""

    @pytest.mark.parametrize("value", [None, True, False, "abc", float("nan"), float("inf"), [], {}])
    def test_unusable_values_become_zero(self, value):
        assert coerce_score(value) == 0.0

    def test_half_rounds_up(self):
        assert round_one_decimal(0.25) == 0.3
        # 12.35 is stored as 12.3499..., so it rounds down
        assert round_one_decimal(12.35) == 12.3
        assert round_one_decimal(83.33333) == 83.3
