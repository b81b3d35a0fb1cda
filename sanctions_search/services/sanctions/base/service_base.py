"""
Base service class for sanctions search services.
Provides common logging and validation.
"""

import logging
from typing import Optional
from abc import ABC, abstractmethod

from .validators import SearchRequestValidator

logger = logging.getLogger(__name__)


class BaseService(ABC):
    """
    Base class for all sanctions search services.
    Provides a shared validator and service-prefixed logging.
    """

    def __init__(self, validator: Optional[SearchRequestValidator] = None):
        """
        Initialize the base service.

        Args:
            validator: Optional validator instance
        """
        self.validator = validator or SearchRequestValidator()
        self.logger = logger

    @abstractmethod
    def get_service_name(self) -> str:
        """
        Get the service name for logging.

        Returns:
            str: The service name
        """
        pass

    def _log(self, level: int, message: str):
        self.logger.log(level, f"[{self.get_service_name()}] {message}")

