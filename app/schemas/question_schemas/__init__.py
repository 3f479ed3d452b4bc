from .question_request import QuestionRequest, ResumeQuestionRequest, JobDescriptionQuestionRequest, QuestionSetRequest
from .question_response import QuestionResponse, TailoredQuestionResponse, QuestionSetResponse

__all__ = [
    "QuestionRequest",
    "ResumeQuestionRequest",
    "JobDescriptionQuestionRequest",
    "QuestionSetRequest",
    "QuestionResponse",
    "TailoredQuestionResponse",
    "QuestionSetResponse",
]
