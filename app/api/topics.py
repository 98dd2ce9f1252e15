from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request

from app.core.exceptions.exceptions import InvalidInputError
from app.schemas.topics import ErrorResponse, TopicSearchResponse
from app.services.topic_query_service import TopicQueryService

router = APIRouter(prefix="/api", tags=["Topics"])


def get_topic_query_service(request: Request) -> TopicQueryService:
    """Return the query service created in the app lifespan."""
    return request.app.state.topic_query_service


@router.get(
    "/topics",
    response_model=TopicSearchResponse,
    summary="Search for programming topics",
    description="Retrieve programming topics whose name contains the search term, "
                "optionally sorted by name and paginated.",
    responses={
        400: {"description": "Missing or invalid search term", "model": ErrorResponse},
        500: {"description": "Topic data could not be loaded", "model": ErrorResponse},
    },
)
def search_topics(
    request: Request,
    search: Optional[str] = Query(None, description="Search term to filter topics by name"),
    sort: Optional[str] = Query(None, description="Sort results by name"),
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    limit: Optional[str] = Query(None, description="Items per page (default 10, max 50)"),
    service: TopicQueryService = Depends(get_topic_query_service),
) -> Dict[str, Any]:
    # page/limit stay raw strings: bad values are coerced, never rejected.
    # A repeated search parameter is not a single string term.
    if len(request.query_params.getlist("search")) > 1:
        raise InvalidInputError("search")

    return service.handle(search, sort, page, limit)
