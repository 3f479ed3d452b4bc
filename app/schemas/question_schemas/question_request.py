"""
Description:
Schemas for the question generation requests.

Dependencies:
- pydantic: For data validation and settings management.
- typing: For type annotations.

Author: @kcaparas1630
"""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from app.schemas.validators import require_text

class QuestionRequest(BaseModel):
    role: Optional[str] = Field(None, description="Role being interviewed for")
    questionNumber: Optional[int] = Field(None, description="1-based position of the question")
    previousQuestions: Optional[List[str]] = Field(None, description="Questions already asked in this interview")

class ResumeQuestionRequest(BaseModel):
    resumeText: str
    jobDescription: str
    questionNumber: Optional[int] = None
    previousQuestions: Optional[List[str]] = None

    @field_validator("resumeText", "jobDescription", mode="before")
    @classmethod
    def non_blank(cls, value, info):
        return require_text(value, info.field_name)

class JobDescriptionQuestionRequest(BaseModel):
    jobDescription: str
    resumeText: Optional[str] = None
    candidateName: Optional[str] = None
    questionNumber: Optional[int] = None
    previousQuestions: Optional[List[str]] = None

    @field_validator("jobDescription", mode="before")
    @classmethod
    def non_blank(cls, value, info):
        return require_text(value, info.field_name)

class QuestionSetRequest(BaseModel):
    role: str
    count: int = Field(5, ge=1, le=20, description="Number of questions to generate")

    @field_validator("role", mode="before")
    @classmethod
    def non_blank(cls, value, info):
        return require_text(value, info.field_name)
