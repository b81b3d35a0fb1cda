import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..utils.logging import activity_logger, error_logger

# Paths that never produce activity entries
SKIP_LOGGING_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def should_skip_logging(path: str) -> bool:
    """
    Determine if logging should be skipped for this path.

    Args:
        path: Request path

    Returns:
        True if logging should be skipped, False otherwise
    """
    return path in SKIP_LOGGING_PATHS or path.startswith("/static/")


def create_narrative(request: Request, status_code: int) -> str:
    """
    Create a narrative description of the request.

    Args:
        request: The FastAPI request object
        status_code: Response status code

    Returns:
        Narrative description
    """
    narrative = f"Client made a {request.method} request to {request.url.path}"

    if request.query_params:
        params_str = ", ".join(f"{k}={v}" for k, v in request.query_params.items())
        narrative += f" with parameters: {params_str}"

    if 200 <= status_code < 300:
        narrative += f" and received a successful response ({status_code})"
    elif 400 <= status_code < 500:
        narrative += f" but had a client error ({status_code})"
    elif 500 <= status_code < 600:
        narrative += f" but encountered a server error ({status_code})"
    else:
        narrative += f" and received a {status_code} response"

    return narrative


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware for adding a unique request ID to each request.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging search activity and unhandled errors.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            await error_logger.log_error(
                error=e,
                request=request,
                additional_context={
                    "request_id": getattr(request.state, "request_id", None),
                    "user_agent": request.headers.get("User-Agent"),
                    "content_type": request.headers.get("Content-Type"),
                }
            )
            # Re-raise the exception to be handled by exception handlers
            raise

        if not should_skip_logging(request.url.path):
            process_time = time.time() - start_time
            await activity_logger.log_activity(
                message=create_narrative(request, response.status_code),
                activity_type="api_request",
                metadata={
                    "request_id": getattr(request.state, "request_id", None),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "process_time_ms": round(process_time * 1000, 2),
                    "client_host": request.client.host if request.client else None,
                    "user_agent": request.headers.get("User-Agent")
                }
            )

        return response
