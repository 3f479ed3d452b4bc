"""
Description:
Schemas for the normalized whole-interview feedback.

Dependencies:
- pydantic: For data validation and settings management.
- typing: For type annotations.

Author: @kcaparas1630
"""
from typing import List, Optional
from pydantic import BaseModel, Field

class QuestionFeedback(BaseModel):
    score: float = Field(..., description="Mean of the six category scores, one decimal")
    best_part_quote: str = Field(default="", description="Strongest sentence, quoted exactly")
    best_part_explanation: str = Field(default="")
    worst_part_quote: str = Field(default="", description="Weakest sentence, quoted exactly")
    worst_part_explanation: str = Field(default="")
    what_went_well: str = Field(default="")
    needs_improvement: str = Field(default="")
    summary: str = Field(default="")
    confidence_score: Optional[float] = Field(default=None, description="Model confidence, 0-100")

class OverallFeedback(BaseModel):
    response_organization: Optional[float] = None
    technical_knowledge: Optional[float] = None
    problem_solving: Optional[float] = None
    position_application: Optional[float] = None
    timing: Optional[float] = None
    personability: Optional[float] = None
    what_went_well: str = Field(default="")
    needs_improvement: str = Field(default="")
    summary: str = Field(default="")
    score: float = Field(..., description="Mean of the six category scores, one decimal")

class FeedbackResult(BaseModel):
    questions: List[QuestionFeedback]
    overall: OverallFeedback
