"""
Description:
Schemas for checking a user's correction of a candidate answer.

Dependencies:
- pydantic: For data validation and settings management.

Author: @kcaparas1630
"""
from pydantic import BaseModel, field_validator
from app.schemas.validators import require_text

class FactCheckRequest(BaseModel):
    question: str
    answer: str
    correction: str

    @field_validator("question", "answer", "correction", mode="before")
    @classmethod
    def non_blank(cls, value, info):
        return require_text(value, info.field_name)

class FactCheckResponse(BaseModel):
    is_correct: bool
    result: str
    explanation: str
