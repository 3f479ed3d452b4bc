from .feedback_request import FeedbackRequest
from .feedback_response import QuestionFeedback, OverallFeedback, FeedbackResult
from .factcheck import FactCheckRequest, FactCheckResponse

__all__ = [
    "FeedbackRequest",
    "QuestionFeedback",
    "OverallFeedback",
    "FeedbackResult",
    "FactCheckRequest",
    "FactCheckResponse",
]
