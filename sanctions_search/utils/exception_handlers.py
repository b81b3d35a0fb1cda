"""
Exception handlers producing the {"message": ...} error body.
"""

import logging
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.exceptions import UpstreamServiceError, ValidationError
from .logging import error_logger

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


def error_response(status_code: int, message: str) -> ORJSONResponse:
    return ORJSONResponse(status_code=status_code, content={"message": message})


def _describe_validation_errors(errors) -> str:
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid request")
        if error.get("type") == "json_invalid":
            return "request body is not valid JSON"
        if location:
            return f"{location}: {message}"
        return message
    return "invalid request"


async def search_validation_exception_handler(request: Request, exc: ValidationError):
    """Handle request rejections raised by the search services."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle malformed or missing request bodies."""
    message = _describe_validation_errors(exc.errors())
    logger.info(f"Invalid request body for {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def pydantic_validation_error_handler(request: Request, exc: PydanticValidationError):
    """Handle pydantic errors raised outside request parsing."""
    message = _describe_validation_errors(exc.errors())
    logger.info(f"Validation error for {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle general HTTP exceptions."""
    return error_response(exc.status_code, str(exc.detail))


async def upstream_exception_handler(request: Request, exc: UpstreamServiceError):
    """Handle translation and search engine failures; no retries are made."""
    await error_logger.log_error(
        error=exc,
        request=request,
        additional_context={"service": exc.service}
    )
    logger.error(f"Upstream failure on {request.url.path}: {exc.message}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Handle anything else; the logging middleware has already recorded it."""
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
