"""
Search engine for sanctions candidates.
Fans queries out over the jurisdiction partitions and merges the hits.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from ..base import BaseService
from .candidate_formatter import CandidateFormatter
from ....schemas.search_schemas import (
    SEARCH_PARTITIONS,
    Candidate,
    Jurisdiction,
    SearchFilter,
    SearchType,
)


class SearchIndexHandle(Protocol):
    async def search(self, query: str, *, limit: int,
                     filter: Optional[SearchFilter] = None,
                     ranking_score_threshold: Optional[float] = None,
                     attributes_to_highlight: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        ...


class SearchClient(Protocol):
    """
    Protocol for the search engine client.
    """

    def index(self, name: str) -> SearchIndexHandle:
        ...


@dataclass
class PartitionResult:
    """Outcome of the search against one partition."""
    country: Jurisdiction
    candidates: List[Candidate] = field(default_factory=list)
    error: Optional[BaseException] = None


@dataclass
class MergeResult:
    """Merged candidates of all partitions plus the partitions that failed."""
    candidates: List[Candidate] = field(default_factory=list)
    failed: List[PartitionResult] = field(default_factory=list)

    @property
    def error_message(self) -> Optional[str]:
        if not self.failed:
            return None
        countries = ", ".join(result.country.value for result in self.failed)
        return f"search failed for partition(s): {countries}"


def score_key(candidate: Candidate) -> float:
    return candidate.score if candidate.score is not None else 0.0


class SearchEngine(BaseService):
    """
    Main search engine for sanctions candidates.

    search_candidates() issues one search per partition, all in flight at
    once, and returns the union sorted by descending ranking score. The
    per-partition limit is not re-applied after merging, so a merge over
    two partitions may hold up to twice the limit.
    """

    def __init__(self, search_client: SearchClient,
                 formatter: Optional[CandidateFormatter] = None,
                 default_index: str = "sanctions",
                 entities_index: str = "entities",
                 fail_fast: bool = False):
        """
        Initialize the search engine.

        Args:
            search_client: Search engine client
            formatter: Candidate formatter instance
            default_index: Index used when none is given
            entities_index: Index whose hits carry a full-text highlight field
            fail_fast: Raise on the first failed partition instead of reporting it
        """
        super().__init__()
        self.search_client = search_client
        self.formatter = formatter or CandidateFormatter()
        self.default_index = default_index
        self.entities_index = entities_index
        self.fail_fast = fail_fast

    def get_service_name(self) -> str:
        """Get the service name."""
        return "search_engine"

    def _attributes_to_highlight(self, index: str) -> List[str]:
        attributes = ["name"]
        if index == self.entities_index:
            attributes.append("fts")
        return attributes

    async def search_text(self, query: str, limit: int,
                          search_filter: Optional[SearchFilter] = None,
                          ranking_threshold: Optional[float] = None,
                          index: Optional[str] = None) -> List[Candidate]:
        """
        Run a single search and format its hits.

        Args:
            query: Text to search for
            limit: Maximum number of hits
            search_filter: Optional filter
            ranking_threshold: Optional minimum ranking score
            index: Index name, defaults to the default index

        Returns:
            List[Candidate]: Candidates in the engine's order
        """
        index = index or self.default_index
        hits = await self.search_client.index(index).search(
            query,
            limit=limit,
            filter=search_filter,
            ranking_score_threshold=ranking_threshold,
            attributes_to_highlight=self._attributes_to_highlight(index),
        )
        return self.formatter.format_hits(hits)

    async def _search_partition(self, query: str, search_type: SearchType, country: Jurisdiction,
                                limit: int, ranking_threshold: Optional[float],
                                index: str) -> PartitionResult:
        candidates = await self.search_text(
            query,
            limit,
            SearchFilter(type=search_type, country=country),
            ranking_threshold,
            index,
        )
        return PartitionResult(country=country, candidates=candidates)

    async def search_candidates(self, query: str, search_type: SearchType, limit: int,
                                ranking_threshold: Optional[float] = None,
                                index: Optional[str] = None) -> MergeResult:
        """
        Search every partition concurrently and merge the results.

        Args:
            query: Text to search for
            search_type: Record type filter applied to every partition
            limit: Maximum number of hits per partition
            ranking_threshold: Optional minimum ranking score
            index: Index name, defaults to the default index

        Returns:
            MergeResult: Candidates sorted by descending score and the
            partitions that failed

        Raises:
            Exception: The first partition failure, when fail_fast is set
        """
        index = index or self.default_index
        outcomes = await asyncio.gather(
            *(
                self._search_partition(query, search_type, country, limit, ranking_threshold, index)
                for country in SEARCH_PARTITIONS
            ),
            return_exceptions=True,
        )

        merged = MergeResult()
        for country, outcome in zip(SEARCH_PARTITIONS, outcomes):
            if isinstance(outcome, BaseException):
                if self.fail_fast or not isinstance(outcome, Exception):
                    raise outcome
                self.logger.error(
                    f"[{self.get_service_name()}] Partition {country.value} failed for '{query}': {outcome}"
                )
                merged.failed.append(PartitionResult(country=country, error=outcome))
                continue
            merged.candidates.extend(outcome.candidates)

        merged.candidates.sort(key=score_key, reverse=True)
        return merged
