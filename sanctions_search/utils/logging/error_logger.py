import json
import logging
import traceback
from datetime import datetime
from typing import Optional, Dict, Any
from pathlib import Path
from fastapi import Request
from starlette.datastructures import Headers

from ...core.config import settings
from .handlers import attach_rotating_handlers

error_log = logging.getLogger("error_logger")
error_log.setLevel(logging.ERROR)

# Headers never written to the error log
SENSITIVE_HEADERS = [
    "authorization", "cookie", "x-api-key", "api-key",
    "x-csrf-token", "csrf-token", "x-xsrf-token"
]


class ErrorLogger:
    """
    Logger for failed requests and upstream errors.
    Entries are JSON lines in <LOG_DIR>/errors/ with request context;
    credentials in headers are redacted.
    """

    def __init__(self, logs_dir: Optional[Path] = None):
        self.logs_dir = logs_dir or Path(settings.log_dir) / "errors"
        attach_rotating_handlers(
            error_log,
            self.logs_dir,
            "error",
            when=settings.error_log_rotation,
            max_size_mb=settings.error_log_max_size_mb,
        )

    def build_entry(
        self,
        error: BaseException,
        request: Optional[Request] = None,
        additional_context: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Build a log entry for an error.

        Args:
            error: The exception that occurred
            request: The FastAPI request object (optional)
            additional_context: Additional contextual information (optional)

        Returns:
            Dictionary ready to be serialised
        """
        stack_trace = traceback.format_exception(
            type(error), error, error.__traceback__
        )

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "error_type": error.__class__.__name__,
            "error_message": str(error),
            "stack_trace": "".join(stack_trace),
            "additional_context": additional_context or {}
        }

        details = getattr(error, "details", None)
        if details:
            log_entry["details"] = details

        if request is not None:
            log_entry["request"] = {
                "method": request.method,
                "url": str(request.url),
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_host": request.client.host if request.client else None,
                "headers": self._safe_headers(request.headers)
            }

        return log_entry

    async def log_error(
        self,
        error: BaseException,
        request: Optional[Request] = None,
        additional_context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log an error with detailed context.

        Args:
            error: The exception that occurred
            request: The FastAPI request object (optional)
            additional_context: Additional contextual information (optional)
        """
        log_entry = self.build_entry(error, request, additional_context)

        # Log as JSON
        error_log.error(json.dumps(log_entry, ensure_ascii=False, default=str))

    def _safe_headers(self, headers: Headers) -> Dict[str, str]:
        """
        Extract headers while removing sensitive information.

        Args:
            headers: Request headers

        Returns:
            Dictionary of safe headers
        """
        headers_dict = dict(headers.items())

        for header in SENSITIVE_HEADERS:
            if header in headers_dict:
                headers_dict[header] = "[REDACTED]"

        return headers_dict


# Global instance for convenience
error_logger = ErrorLogger()
