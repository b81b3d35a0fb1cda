"""
Meilisearch client for the sanctions index.
Thin async wrapper over the REST search API.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ....core.exceptions import UpstreamServiceError
from ....schemas.search_schemas import SearchFilter

logger = logging.getLogger(__name__)


class SearchIndex:
    """
    Handle on a single index. Creating one makes no network call.
    """

    def __init__(self, client: "MeilisearchClient", name: str):
        self.client = client
        self.name = name

    async def search(self, query: str, *, limit: int,
                     filter: Optional[SearchFilter] = None,
                     ranking_score_threshold: Optional[float] = None,
                     attributes_to_highlight: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        """
        Search the index.

        Args:
            query: Text to search for
            limit: Maximum number of hits
            filter: Optional type/country filter
            ranking_score_threshold: Hits scoring below this are dropped by the engine
            attributes_to_highlight: Fields to return highlighted in "_formatted"

        Returns:
            List[Dict[str, Any]]: Raw hits, each with a "_rankingScore"

        Raises:
            UpstreamServiceError: On transport errors or non-2xx responses
        """
        payload: Dict[str, Any] = {
            "q": query,
            "limit": limit,
            "showRankingScore": True,
            "attributesToHighlight": attributes_to_highlight or ["name"],
        }

        expression = filter.to_expression() if filter else None
        if expression:
            payload["filter"] = expression
        if ranking_score_threshold:
            payload["rankingScoreThreshold"] = ranking_score_threshold
        if self.client.highlight_pre_tag:
            payload["highlightPreTag"] = self.client.highlight_pre_tag
        if self.client.highlight_post_tag:
            payload["highlightPostTag"] = self.client.highlight_post_tag

        data = await self.client.request("POST", f"/indexes/{self.name}/search", json=payload)
        return data.get("hits", [])


class MeilisearchClient:
    """
    Client for a Meilisearch instance.
    The underlying httpx.AsyncClient is shared and owned by the application.
    """

    def __init__(self, http_client: httpx.AsyncClient, base_url: str,
                 api_key: Optional[str] = None,
                 highlight_pre_tag: Optional[str] = None,
                 highlight_post_tag: Optional[str] = None):
        """
        Args:
            http_client: Shared async HTTP client
            base_url: Meilisearch base URL
            api_key: Optional search API key
            highlight_pre_tag: Optional tag inserted before highlighted text
            highlight_post_tag: Optional tag inserted after highlighted text
        """
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.highlight_pre_tag = highlight_pre_tag
        self.highlight_post_tag = highlight_post_tag

    @classmethod
    def from_settings(cls, http_client: httpx.AsyncClient, settings) -> "MeilisearchClient":
        return cls(
            http_client,
            settings.meilisearch_api_url,
            api_key=settings.meilisearch_api_key,
            highlight_pre_tag=settings.highlight_pre_tag,
            highlight_post_tag=settings.highlight_post_tag,
        )

    def index(self, name: str) -> SearchIndex:
        return SearchIndex(self, name)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = await self.http_client.request(method, url, json=json, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Meilisearch {method} {path} returned {e.response.status_code}: {e.response.text}")
            raise UpstreamServiceError(
                "meilisearch", f"HTTP {e.response.status_code}", {"path": path}
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Meilisearch {method} {path} failed: {str(e)}")
            raise UpstreamServiceError("meilisearch", str(e) or e.__class__.__name__, {"path": path}) from e

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Meilisearch {method} {path} returned a non-JSON body")
            raise UpstreamServiceError("meilisearch", "invalid JSON response", {"path": path}) from e

    async def health(self) -> bool:
        """Return True when the instance reports itself available."""
        try:
            data = await self.request("GET", "/health")
        except UpstreamServiceError:
            return False
        return data.get("status") == "available"
