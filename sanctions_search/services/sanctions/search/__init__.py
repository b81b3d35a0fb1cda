"""
Search module for sanctions services.
Handles query processing, partition fan-out and candidate formatting.
"""

from .search_engine import SearchEngine, MergeResult, PartitionResult
from .query_processor import QueryProcessor
from .candidate_formatter import CandidateFormatter

__all__ = [
    'SearchEngine',
    'MergeResult',
    'PartitionResult',
    'QueryProcessor',
    'CandidateFormatter'
]
