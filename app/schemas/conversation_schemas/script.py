"""
Description:
Schemas for scripted interviewer lines and spoken summaries.

Dependencies:
- pydantic: For data validation and settings management.
- typing: For type annotations.

Author: @kcaparas1630
"""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from app.schemas.validators import require_text

class ScriptRequest(BaseModel):
    systemPrompt: str
    directive: str
    conversationContext: Optional[str] = None

    @field_validator("systemPrompt", "directive", mode="before")
    @classmethod
    def non_blank(cls, value, info):
        return require_text(value, info.field_name)

class OverallSummaryInput(BaseModel):
    score: float = 0
    what_went_well: str = ""
    needs_improvement: str = ""

class QuestionSummaryInput(BaseModel):
    score: float = 0
    summary: str = ""

class VoiceSummaryRequest(BaseModel):
    overall: OverallSummaryInput = Field(..., description="Overall block of a feedback result")
    questions: List[QuestionSummaryInput] = Field(..., description="Per-question feedback, in order")

class TextResponse(BaseModel):
    text: str
