"""
Description:
Schema for the speech-to-text credential handed to the browser.

Dependencies:
- pydantic: For data validation and settings management.

Author: @kcaparas1630
"""
from pydantic import BaseModel

class SpeechKeyResponse(BaseModel):
    """
    Deepgram key the browser uses to open its streaming connection.
    """
    key: str
