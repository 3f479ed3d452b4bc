"""
Description:
Schema for a whole-interview feedback request.

Dependencies:
- pydantic: For data validation and settings management.

Author: @kcaparas1630
"""
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator

class FeedbackRequest(BaseModel):
    questions: List[str] = Field(..., description="Interview questions, in the order they were asked")
    answers: List[str] = Field(..., description="Candidate answers, parallel to questions")
    resumeText: Optional[str] = Field(None, description="Optional resume used to tailor the feedback")
    jobDescription: Optional[str] = Field(None, description="Optional job description used to tailor the feedback")

    @model_validator(mode="after")
    def check_parallel_arrays(self) -> "FeedbackRequest":
        if len(self.questions) != len(self.answers):
            raise ValueError("questions and answers must be parallel arrays")
        if not self.questions:
            raise ValueError("questions must contain at least one question")
        return self
