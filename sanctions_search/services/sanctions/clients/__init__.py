"""
Clients module for sanctions search.
Wraps the external search engine.
"""

from .meilisearch_client import MeilisearchClient, SearchIndex

__all__ = [
    'MeilisearchClient',
    'SearchIndex'
]
