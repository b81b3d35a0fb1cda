from typing import Optional, List, Union
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class SearchType(str, Enum):
    """Watch-list record types. ANY leaves the dimension unconstrained."""
    ANY = "any"
    INDIVIDUAL = "individual"
    ENTITY = "entity"


class Jurisdiction(str, Enum):
    """Index partitions. ANY leaves the dimension unconstrained."""
    ANY = "any"
    AU = "au"
    NZ = "nz"


# Partitions every smart search fans out to
SEARCH_PARTITIONS = (Jurisdiction.AU, Jurisdiction.NZ)


class SearchFilterRequest(BaseModel):
    """Raw filter as sent by the client; values are checked by the validator."""
    type: Optional[str] = None
    country: Optional[str] = None


class SearchRequest(BaseModel):
    q: str = Field(..., description="Free-text query, one name per line for smart search")
    filter: Optional[SearchFilterRequest] = Field(None, description="Optional type/country filter")
    limit: Optional[Union[int, float, str]] = Field(None, description="Maximum results (direct search only)")


class SearchFilter(BaseModel):
    """Validated filter with an explicit unconstrained state for each dimension."""
    model_config = ConfigDict(frozen=True)

    type: SearchType = SearchType.ANY
    country: Jurisdiction = Jurisdiction.ANY

    def to_expression(self) -> Optional[str]:
        """Render the filter in the search engine's filter syntax."""
        parts = []
        if self.type is not SearchType.ANY:
            parts.append(f"type = {self.type.value}")
        if self.country is not Jurisdiction.ANY:
            parts.append(f"country = {self.country.value}")
        return " AND ".join(parts) or None


class Candidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    name_formatted: Optional[str] = Field(None, alias="nameFormatted")
    type: Optional[str] = None
    country: Optional[str] = None
    score: Optional[float] = None


class CandidateGroup(BaseModel):
    q: Optional[str] = Field(None, description="Original input line")
    x: Optional[str] = Field(None, description="Line as searched (transliterated or cleaned)")
    candidates: List[Candidate] = Field(default_factory=list)
    error: Optional[str] = Field(None, description="Set when part of this line's search failed")


class DirectSearchResponse(BaseModel):
    results: List[Candidate]


class SmartSearchResponse(BaseModel):
    results: List[CandidateGroup]


class ErrorResponse(BaseModel):
    message: str

