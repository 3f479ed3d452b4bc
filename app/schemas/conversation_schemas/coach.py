"""
Description:
Schemas for the post-interview coaching chat.

Messages and list fields are accepted loosely and filtered by the coaching
service, matching what the browser may send mid-conversation.

Dependencies:
- pydantic: For data validation and settings management.
- typing: For type annotations.

Author: @kcaparas1630
"""
from typing import Any, List, Optional
from pydantic import BaseModel

class CoachRequest(BaseModel):
    messages: Optional[List[Any]] = None
    question: Optional[str] = None
    transcript: Optional[str] = None
    suggestions: Optional[List[Any]] = None
    followUp: Optional[str] = None
    scoreSummary: Optional[List[Any]] = None
    categoryFeedback: Optional[List[Any]] = None
    overallSummary: Optional[str] = None
    role: Optional[str] = None
    difficulty: Optional[str] = None

class CoachResponse(BaseModel):
    reply: str
    blocked: Optional[bool] = None
