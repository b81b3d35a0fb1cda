"""
Validators for sanctions search inputs.
Checks run before any collaborator call, cheapest first.
"""

import logging
from typing import Any, Optional

from ....core.exceptions import ValidationError
from ....schemas.search_schemas import (
    Jurisdiction,
    SearchFilter,
    SearchFilterRequest,
    SearchType,
)

logger = logging.getLogger(__name__)

QUERY_TOO_LONG = "query is too long"
INVALID_FILTER_TYPE = "invalid filter type"
INVALID_FILTER_COUNTRY = "invalid filter country"


class SearchRequestValidator:
    """
    Validator class for search request inputs.
    Provides validation methods for direct and smart search.
    """

    def __init__(self):
        self.logger = logger

    def validate_query_length(self, query: str, max_length: int) -> str:
        """
        Validate the raw query length.

        Args:
            query: Raw, untrimmed query text
            max_length: Maximum allowed length

        Returns:
            str: The unchanged query

        Raises:
            ValidationError: If the query is longer than max_length
        """
        if len(query) > max_length:
            self.logger.info(f"Rejected query of length {len(query)} (limit {max_length})")
            raise ValidationError(QUERY_TOO_LONG, {"length": len(query), "limit": max_length})
        return query

    def validate_search_type(self, value: Optional[str], required: bool = False) -> SearchType:
        """
        Validate a filter type value.

        Args:
            value: Raw type value from the request
            required: Whether an absent type is an error

        Returns:
            SearchType: The validated type, ANY when absent and not required

        Raises:
            ValidationError: If the type is unknown, or absent while required
        """
        if not value:
            if required:
                raise ValidationError(INVALID_FILTER_TYPE)
            return SearchType.ANY

        if value not in (SearchType.INDIVIDUAL.value, SearchType.ENTITY.value):
            raise ValidationError(INVALID_FILTER_TYPE, {"type": value})

        return SearchType(value)

    def validate_country(self, value: Optional[str]) -> Jurisdiction:
        """
        Validate a filter country value.

        Raises:
            ValidationError: If the country is not a supported partition
        """
        if not value:
            return Jurisdiction.ANY

        if value not in (Jurisdiction.AU.value, Jurisdiction.NZ.value):
            raise ValidationError(INVALID_FILTER_COUNTRY, {"country": value})

        return Jurisdiction(value)

    def validate_search_filter(self, filter_request: Optional[SearchFilterRequest]) -> SearchFilter:
        """
        Validate the optional filter of a direct search.

        Args:
            filter_request: Raw filter from the request body

        Returns:
            SearchFilter: Filter with unconstrained dimensions set to ANY
        """
        if filter_request is None:
            return SearchFilter()

        search_type = self.validate_search_type(filter_request.type)
        country = self.validate_country(filter_request.country)
        return SearchFilter(type=search_type, country=country)

    def validate_smart_search_type(self, filter_request: Optional[SearchFilterRequest]) -> SearchType:
        """
        Validate the mandatory filter type of a smart search.

        Raises:
            ValidationError: If the type is missing or unknown
        """
        value = filter_request.type if filter_request is not None else None
        return self.validate_search_type(value, required=True)

    def validate_limit(self, limit: Any, max_limit: int) -> int:
        """
        Clamp a requested result limit.

        Anything that is not a positive number up to max_limit falls back
        to max_limit.
        """
        requested = self._coerce_int(limit)
        if requested is None or requested <= 0 or requested > max_limit:
            return max_limit
        return requested

    @staticmethod
    def _coerce_int(value: Any) -> Optional[int]:
        """
        Best-effort coercion to int.
        """
        if value is None:
            return None
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        try:
            return int(float(value))
        except (ValueError, TypeError, OverflowError):
            return None
