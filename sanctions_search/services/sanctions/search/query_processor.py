"""
Query processor for sanctions search.
Handles line splitting, trimming and entity-name cleaning.
"""

import re
from typing import List

from ..base import BaseService, SearchRequestValidator

LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

# Every code point with the Unicode Quotation_Mark property
QUOTATION_MARK_PATTERN = re.compile(
    "["
    "\u0022\u0027\u00ab\u00bb"
    "\u2018-\u201f"
    "\u2039\u203a\u2e42"
    "\u300c-\u300f\u301d-\u301f"
    "\ufe41-\ufe44"
    "\uff02\uff07\uff62\uff63"
    "]"
)


class QueryProcessor(BaseService):
    """
    Service for processing search queries.
    Turns raw multi-line input into ordered, non-empty lines.
    """

    def __init__(self, validator: SearchRequestValidator = None):
        """
        Initialize the query processor.

        Args:
            validator: Optional validator instance
        """
        super().__init__(validator)

    def get_service_name(self) -> str:
        """Get the service name."""
        return "query_processor"

    def normalize_query(self, query: str) -> str:
        """
        Normalize a single-line query by trimming surrounding whitespace.

        Args:
            query: Raw search query

        Returns:
            str: Trimmed query, empty when nothing is left
        """
        return (query or "").strip()

    def split_lines(self, text: str) -> List[str]:
        """
        Split text into trimmed, non-empty lines, keeping their order.

        Args:
            text: Raw multi-line text

        Returns:
            List[str]: Lines in input order; empty when the text is blank
        """
        if not text:
            return []
        lines = [line.strip() for line in LINE_BREAK_PATTERN.split(text)]
        return [line for line in lines if line]

    def join_lines(self, lines: List[str]) -> str:
        return "\n".join(lines)

    def clean_entity_name(self, line: str) -> str:
        """
        Prepare an organisation name for the entity index.

        Quotation marks are removed and hyphens become spaces, so
        'ТОВ "Альфа-Груп"' is searched as 'ТОВ Альфа Груп'.
        """
        return QUOTATION_MARK_PATTERN.sub("", line).replace("-", " ")
