"""
Description:
Schemas for deciding whether a paused candidate has finished answering.

Dependencies:
- pydantic: For data validation and settings management.

Author: @kcaparas1630
"""
from typing import Literal
from pydantic import BaseModel, field_validator
from app.schemas.validators import require_text

PauseVerdict = Literal["definitely_done", "definitely_still_talking", "ask"]

class PauseRequest(BaseModel):
    transcript: str

    @field_validator("transcript", mode="before")
    @classmethod
    def non_blank(cls, value, info):
        return require_text(value, info.field_name)

class PauseResponse(BaseModel):
    verdict: PauseVerdict
