"""
Base module for sanctions search services.
Contains common infrastructure and base classes.
"""

from .service_base import BaseService
from .validators import SearchRequestValidator, ValidationError

__all__ = [
    'BaseService',
    'SearchRequestValidator',
    'ValidationError'
]
