"""
Description:
Rubric categories scored by the feedback model, for each question and for the
interview as a whole.

Author: @kcaparas1630
"""

CATEGORIES = (
    "response_organization",
    "technical_knowledge",
    "problem_solving",
    "position_application",
    "timing",
    "personability",
)

PAUSE_VERDICTS = ("definitely_done", "definitely_still_talking", "ask")
DEFAULT_PAUSE_VERDICT = "ask"
