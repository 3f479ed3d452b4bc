"""
Description:
Schemas for generated interview questions.

Dependencies:
- pydantic: For data validation and settings management.

Author: @kcaparas1630
"""
from typing import List
from pydantic import BaseModel

class QuestionResponse(BaseModel):
    question: str

class TailoredQuestionResponse(BaseModel):
    question: str = ""
    type: str = "behavioral"
    focus: str = ""

class QuestionSetResponse(BaseModel):
    questions: List[str]
