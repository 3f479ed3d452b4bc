from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_405_METHOD_NOT_ALLOWED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Wrong-method responses carry no body, only the Allow header.
    if exc.status_code == HTTP_405_METHOD_NOT_ALLOWED:
        return Response(status_code=exc.status_code, headers=getattr(exc, "headers", None))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

def describe_validation_error(exc: RequestValidationError) -> str:
    """
    Turn the first pydantic validation error into a short client-facing message.

    Args:
        exc: The RequestValidationError raised while parsing the request body.

    Returns:
        str: A message such as "transcript is required" or
             "questions and answers must be parallel arrays".
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request body"

    first = errors[0]
    error_type = first.get("type", "")
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(location)

    if error_type == "json_invalid":
        return "Request body must be valid JSON"
    if error_type == "missing":
        return f"{field} is required" if field else "Request body is required"
    if error_type == "value_error":
        message = str(first.get("ctx", {}).get("error", first.get("msg", "")))
        return message.removeprefix("Value error, ")
    message = first.get("msg", "is invalid")
    return f"{field}: {message}" if field else message

def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = describe_validation_error(exc)
    logger.bind(endpoint=request.url.path.lstrip("/")).info(f"Rejected request: {message}")
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"error": message},
    )

def generic_exception_handler(request: Request, exc: Exception):
    logger.bind(endpoint=request.url.path.lstrip("/")).opt(exception=exc).error(
        f"Unhandled error: {exc}"
    )
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred."},
    )
