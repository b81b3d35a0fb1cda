"""
Sanctions search orchestrator.
Coordinates validation, translation, transliteration and partitioned search
for the direct and smart search operations.
"""

import asyncio
import logging
from typing import List, Optional

from .base import BaseService, SearchRequestValidator
from .language import Translator, get_scheme, transliterate
from .search import CandidateFormatter, QueryProcessor, SearchEngine
from .search.search_engine import SearchClient
from ...core.config import Settings, settings as default_settings
from ...schemas.search_schemas import (
    Candidate,
    CandidateGroup,
    SearchRequest,
    SearchType,
)

logger = logging.getLogger(__name__)


class SanctionsOrchestrator(BaseService):
    """
    Main orchestrator for sanctions name search.

    Collaborator clients are long-lived and injected; everything else is
    built per orchestrator and holds no request state.
    """

    def __init__(self, search_client: SearchClient, translator: Translator,
                 settings: Optional[Settings] = None):
        """
        Initialize the sanctions orchestrator.

        Args:
            search_client: Search engine client
            translator: Translation service
            settings: Limits, thresholds and index names
        """
        self.settings = settings or default_settings
        super().__init__(SearchRequestValidator())

        # Fail at construction rather than on the first request
        get_scheme(self.settings.transliteration_scheme)

        self.translator = translator
        self.query_processor = QueryProcessor(self.validator)
        self.candidate_formatter = CandidateFormatter(self.validator)
        self.search_engine = SearchEngine(
            search_client,
            self.candidate_formatter,
            default_index=self.settings.meilisearch_index,
            entities_index=self.settings.meilisearch_entities_index,
            fail_fast=self.settings.smart_search_fail_fast,
        )

    def get_service_name(self) -> str:
        """Get the service name."""
        return "sanctions_orchestrator"

    # ======================
    # Direct search
    # ======================

    async def direct_search(self, request: SearchRequest) -> List[Candidate]:
        """
        Search the default index once with the caller's filter and limit.

        Args:
            request: Search request

        Returns:
            List[Candidate]: Candidates in the engine's order, empty for a blank query

        Raises:
            ValidationError: If the query is too long or the filter is invalid
            UpstreamServiceError: If the search engine fails
        """
        query = self.query_processor.normalize_query(request.q)
        if not query:
            return []

        self.validator.validate_query_length(request.q, self.settings.search_input_limit)
        search_filter = self.validator.validate_search_filter(request.filter)
        limit = self.validator.validate_limit(request.limit, self.settings.search_results_limit)

        self._log(logging.INFO, f"Direct search '{query}' filter={search_filter.to_expression()} limit={limit}")
        return await self.search_engine.search_text(query, limit, search_filter)

    # ======================
    # Smart search
    # ======================

    async def smart_search(self, request: SearchRequest) -> List[CandidateGroup]:
        """
        Resolve every line of the query with the pipeline chosen by filter.type.

        The request limit is ignored; the configured smart search limit is
        applied per partition.

        Raises:
            ValidationError: If the query is too long or filter.type is missing or invalid
            UpstreamServiceError: If translation fails, or a search fails in fail-fast mode
        """
        if not self.query_processor.normalize_query(request.q):
            return []

        self.validator.validate_query_length(request.q, self.settings.smart_search_input_limit)
        search_type = self.validator.validate_smart_search_type(request.filter)

        if search_type is SearchType.INDIVIDUAL:
            return await self.search_individuals(request.q)
        return await self.search_entities(request.q)

    async def search_individuals(self, text: str, limit: Optional[int] = None) -> List[CandidateGroup]:
        """
        Translate, transliterate and search each line as a person's name.

        Args:
            text: Raw multi-line input
            limit: Per-partition limit, defaults to the smart search limit

        Returns:
            List[CandidateGroup]: One group per input line, in input order;
            empty when the input is blank or translation returned nothing
        """
        limit = limit or self.settings.smart_search_results_limit
        original = self.query_processor.split_lines(text)
        if not original:
            return []

        translated = await self._translate_lines(original)
        if translated is None:
            self._log(logging.INFO, "Translation returned no text, nothing to search")
            return []

        return list(await asyncio.gather(*(
            self._search_individual_line(line, translated_line, limit)
            for line, translated_line in zip(original, translated)
        )))

    async def search_entities(self, text: str, limit: Optional[int] = None) -> List[CandidateGroup]:
        """
        Clean and search each line as an organisation name.

        Args:
            text: Raw multi-line input
            limit: Per-partition limit, defaults to the smart search limit

        Returns:
            List[CandidateGroup]: One group per input line, in input order
        """
        limit = limit or self.settings.smart_search_results_limit
        original = self.query_processor.split_lines(text)
        if not original:
            return []

        return list(await asyncio.gather(*(
            self._search_entity_line(line, limit) for line in original
        )))

    async def _translate_lines(self, lines: List[str]) -> Optional[List[str]]:
        """
        Translate all lines with one upstream call.

        When the translation does not split back into the same number of
        lines, each line is translated on its own so results stay paired
        with the line they came from.
        """
        target = self.settings.translate_target_language
        translated = await self.translator.translate(self.query_processor.join_lines(lines), target)
        if not translated:
            return None

        translated_lines = self.query_processor.split_lines(translated)
        if not translated_lines:
            return None
        if len(translated_lines) == len(lines):
            return translated_lines

        self._log(
            logging.WARNING,
            f"Translation changed line count {len(lines)} -> {len(translated_lines)}, translating per line",
        )
        per_line = await asyncio.gather(*(self.translator.translate(line, target) for line in lines))
        return [" ".join(self.query_processor.split_lines(result or "")) for result in per_line]

    async def _search_individual_line(self, line: str, translated_line: str, limit: int) -> CandidateGroup:
        romanised = transliterate(translated_line, self.settings.transliteration_scheme)
        if not romanised.strip():
            return CandidateGroup(q=line, x=romanised, candidates=[])

        merged = await self.search_engine.search_candidates(
            romanised,
            SearchType.INDIVIDUAL,
            limit,
            self.settings.individual_search_ranking_threshold,
        )
        return CandidateGroup(q=line, x=romanised, candidates=merged.candidates, error=merged.error_message)

    async def _search_entity_line(self, line: str, limit: int) -> CandidateGroup:
        cleaned = self.query_processor.clean_entity_name(line)
        if not cleaned.strip():
            return CandidateGroup(q=line, x=cleaned, candidates=[])

        merged = await self.search_engine.search_candidates(
            cleaned,
            SearchType.ENTITY,
            limit,
            self.settings.entity_search_ranking_threshold,
            self.settings.meilisearch_entities_index,
        )
        return CandidateGroup(q=line, x=cleaned, candidates=merged.candidates, error=merged.error_message)
