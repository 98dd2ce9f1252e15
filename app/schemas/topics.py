from typing import Any, Dict, List
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortOption(str, Enum):
    NONE = "none"
    NAME = "name"


class TopicQuery(BaseModel):
    """Normalized search query. Built by the query service, never from raw input."""
    model_config = ConfigDict(frozen=True)

    search: str = Field(..., min_length=1)
    sort: SortOption = SortOption.NONE
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)


class Pagination(BaseModel):
    total: int = Field(..., ge=0, description="Number of topics matching the search")
    page: int = Field(..., description="Page number used")
    limit: int = Field(..., description="Page size used")
    totalPages: int = Field(..., ge=0, description="ceil(total / limit)")


class TopicSearchResponse(BaseModel):
    # topic records are passed through as-is
    data: List[Dict[str, Any]]
    pagination: Pagination


class ErrorResponse(BaseModel):
    error: str
