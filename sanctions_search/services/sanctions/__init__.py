"""
Sanctions search services module.
Resolves free-text names against the sanctions watch-list index.
"""

from .sanctions_orchestrator import SanctionsOrchestrator

# Base services
from .base import BaseService, SearchRequestValidator

# Search services
from .search import SearchEngine, QueryProcessor, CandidateFormatter

# Language services
from .language import AwsTranslator, Translator, transliterate

# Clients
from .clients import MeilisearchClient

__all__ = [
    # Main orchestrator
    'SanctionsOrchestrator',

    # Base services
    'BaseService',
    'SearchRequestValidator',

    # Search services
    'SearchEngine',
    'QueryProcessor',
    'CandidateFormatter',

    # Language services
    'AwsTranslator',
    'Translator',
    'transliterate',

    # Clients
    'MeilisearchClient'
]
