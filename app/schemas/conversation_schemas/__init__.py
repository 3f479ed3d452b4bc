from .pause import PauseRequest, PauseResponse, PauseVerdict
from .script import ScriptRequest, VoiceSummaryRequest, OverallSummaryInput, QuestionSummaryInput, TextResponse
from .coach import CoachRequest, CoachResponse

__all__ = [
    "PauseRequest",
    "PauseResponse",
    "PauseVerdict",
    "ScriptRequest",
    "VoiceSummaryRequest",
    "OverallSummaryInput",
    "QuestionSummaryInput",
    "TextResponse",
    "CoachRequest",
    "CoachResponse",
]
