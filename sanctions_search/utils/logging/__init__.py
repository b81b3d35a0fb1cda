from .activity_logger import ActivityLogger, logger_instance as activity_logger
from .error_logger import ErrorLogger, error_logger

__all__ = [
    'ActivityLogger',
    'ErrorLogger',
    'activity_logger',
    'error_logger'
]
