"""
Candidate formatter for sanctions search.
Projects raw index hits into the public candidate shape.
"""

from typing import Any, Dict, List, Optional

from ..base import BaseService
from ....schemas.search_schemas import Candidate

FTS_SEPARATOR = "<br />"


class CandidateFormatter(BaseService):
    """
    Service for formatting search hits.
    Picks the highlighted field that best represents the match.
    """

    def get_service_name(self) -> str:
        """Get the service name."""
        return "candidate_formatter"

    def format_hit(self, hit: Dict[str, Any]) -> Candidate:
        """
        Format a single hit.

        The full-text highlight of the entities index wins over the name
        highlight; hits without any highlight carry no nameFormatted.

        Args:
            hit: Raw hit as returned by the search engine

        Returns:
            Candidate: Formatted candidate
        """
        return Candidate(
            name=hit.get("name"),
            name_formatted=self._formatted_name(hit.get("_formatted")),
            type=hit.get("type"),
            country=hit.get("country"),
            score=hit.get("_rankingScore"),
        )

    def format_hits(self, hits: List[Dict[str, Any]]) -> List[Candidate]:
        return [self.format_hit(hit) for hit in hits]

    def _formatted_name(self, formatted: Optional[Dict[str, Any]]) -> Optional[str]:
        if not formatted:
            return None

        fts = formatted.get("fts")
        if fts:
            if isinstance(fts, list):
                return FTS_SEPARATOR.join(str(fragment) for fragment in fts)
            return str(fts)

        return formatted.get("name") or None
