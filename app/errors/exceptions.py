from fastapi import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_504_GATEWAY_TIMEOUT,
)

class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)

class InternalServerError(HTTPException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)

class ClientInputError(BadRequest):
    def __init__(self, detail: str = "Invalid request body"):
        super().__init__(detail=detail)

class ConfigurationError(InternalServerError):
    def __init__(self, setting: str = None):
        detail = f"{setting} is not configured" if setting else "Server is not configured"
        super().__init__(detail=detail)

class UpstreamError(HTTPException):
    def __init__(self, provider: str = None):
        detail = f"{provider} API error" if provider else "Upstream API error"
        super().__init__(status_code=HTTP_502_BAD_GATEWAY, detail=detail)

class UpstreamTimeoutError(HTTPException):
    def __init__(self, provider: str = None):
        detail = f"{provider} request timed out" if provider else "Upstream request timed out"
        super().__init__(status_code=HTTP_504_GATEWAY_TIMEOUT, detail=detail)

class UpstreamMalformedResponseError(HTTPException):
    def __init__(self, detail: str = "AI returned invalid JSON"):
        super().__init__(status_code=HTTP_502_BAD_GATEWAY, detail=detail)

class IncompleteFeedbackError(UpstreamMalformedResponseError):
    def __init__(self, expected: int = None, received: int = None):
        detail = "AI returned incomplete feedback. Please retry."
        super().__init__(detail=detail)
        self.expected = expected
        self.received = received
