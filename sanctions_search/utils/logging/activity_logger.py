import json
import logging
from datetime import datetime
from typing import Optional, Dict, Any
from pathlib import Path

from ...core.config import settings
from .handlers import attach_rotating_handlers

activity_log = logging.getLogger("activity_logger")
activity_log.setLevel(logging.INFO)


class ActivityLogger:
    """
    Logger for API and search activity.
    Entries are JSON lines in <LOG_DIR>/activity/.
    """

    def __init__(self, logs_dir: Optional[Path] = None):
        self.logs_dir = logs_dir or Path(settings.log_dir) / "activity"
        attach_rotating_handlers(
            activity_log,
            self.logs_dir,
            "activity",
            when=settings.activity_log_rotation,
            max_size_mb=settings.activity_log_max_size_mb,
        )

    async def log_activity(
        self,
        message: str,
        activity_type: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log an activity in a narrative format.

        Args:
            message: The narrative description of the activity
            activity_type: The type of activity (optional)
            metadata: Additional contextual information (optional)
        """
        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "message": message,
            "activity_type": activity_type,
            "metadata": metadata or {}
        }

        activity_log.info(json.dumps(log_entry, ensure_ascii=False, default=str))

    async def log_search(
        self,
        operation: str,
        request_id: Optional[str],
        line_count: int,
        candidate_count: int,
        failed_lines: int = 0,
        duration_ms: Optional[float] = None
    ) -> None:
        """
        Log the outcome of a direct or smart search.

        Query text is not logged, only its shape and the result counts.
        """
        message = f"{operation} resolved {line_count} line(s) into {candidate_count} candidate(s)"
        if failed_lines:
            message += f", {failed_lines} line(s) partially failed"

        await self.log_activity(
            message=message,
            activity_type=operation,
            metadata={
                "request_id": request_id,
                "line_count": line_count,
                "candidate_count": candidate_count,
                "failed_lines": failed_lines,
                "duration_ms": duration_ms,
            }
        )


# Global instance for convenience
logger_instance = ActivityLogger()
