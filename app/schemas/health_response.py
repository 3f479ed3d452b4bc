"""
Description:
Schema for the liveness check. The check never touches a provider, so it only
reports that the process is serving requests.

Dependencies:
- pydantic: For data validation and settings management.

Author: @kcaparas1630
"""
from typing import Literal
from pydantic import BaseModel

class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
