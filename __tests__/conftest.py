"""
Shared fakes for the sanctions search tests.
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from sanctions_search.core.config import Settings
from sanctions_search.core.exceptions import UpstreamServiceError
from sanctions_search.schemas.search_schemas import Jurisdiction, SearchFilter


def make_hit(name: str, score: float, type: str = "individual", country: str = "au",
             formatted: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    hit = {"name": name, "type": type, "country": country, "_rankingScore": score}
    if formatted is not None:
        hit["_formatted"] = formatted
    return hit


class FakeIndex:
    def __init__(self, client: "FakeSearchClient", name: str):
        self.client = client
        self.name = name

    async def search(self, query: str, *, limit: int,
                     filter: Optional[SearchFilter] = None,
                     ranking_score_threshold: Optional[float] = None,
                     attributes_to_highlight: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        country = filter.country if filter else Jurisdiction.ANY
        self.client.calls.append({
            "index": self.name,
            "query": query,
            "limit": limit,
            "filter": filter,
            "ranking_score_threshold": ranking_score_threshold,
            "attributes_to_highlight": attributes_to_highlight,
        })
        delay = self.client.delays.get((query, country), 0)
        if delay:
            await asyncio.sleep(delay)
        if (query, country) in self.client.failures:
            raise UpstreamServiceError("meilisearch", f"partition {country.value} unavailable")
        hits = self.client.hits.get((query, country), [])
        return hits[:limit]


class FakeSearchClient:
    """
    In-memory search client.

    hits and delays are keyed by (query, Jurisdiction); failures is a set of
    the same keys.
    """

    def __init__(self, hits=None, delays=None, failures=None):
        self.hits = hits or {}
        self.delays = delays or {}
        self.failures = failures or set()
        self.calls: List[Dict[str, Any]] = []

    def index(self, name: str) -> FakeIndex:
        return FakeIndex(self, name)


class FakeTranslator:
    """
    Translator returning canned answers; falls back to the input text.
    """

    def __init__(self, answers: Optional[Dict[str, Optional[str]]] = None, default: Any = "echo"):
        self.answers = answers or {}
        self.default = default
        self.calls: List[tuple] = []

    async def translate(self, text: str, target_language: str) -> Optional[str]:
        self.calls.append((text, target_language))
        if text in self.answers:
            return self.answers[text]
        return text if self.default == "echo" else self.default


class FailingTranslator(FakeTranslator):
    """
    Translator whose upstream is down.
    """

    async def translate(self, text: str, target_language: str) -> Optional[str]:
        self.calls.append((text, target_language))
        raise UpstreamServiceError("translate", "ServiceUnavailableException")


@pytest.fixture
def test_settings() -> Settings:
    test_settings = Settings()
    test_settings.meilisearch_index = "sanctions"
    test_settings.meilisearch_entities_index = "entities"
    test_settings.search_results_limit = 10
    test_settings.search_input_limit = 100
    test_settings.smart_search_results_limit = 5
    test_settings.smart_search_input_limit = 1000
    test_settings.smart_search_fail_fast = False
    test_settings.individual_search_ranking_threshold = 0.5
    test_settings.entity_search_ranking_threshold = None
    test_settings.translate_target_language = "ru"
    test_settings.transliteration_scheme = "icao_doc_9303"
    return test_settings
