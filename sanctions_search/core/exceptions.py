"""
Exceptions shared by the sanctions search services.
"""

from typing import Any, Dict, Optional


class SanctionsSearchError(Exception):
    """Base exception for sanctions search errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(SanctionsSearchError):
    """Raised when a request is rejected before any collaborator is called."""
    pass


class UpstreamServiceError(SanctionsSearchError):
    """Raised when the translation service or the search engine fails."""

    def __init__(self, service: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"{service}: {message}", details)
        self.service = service
