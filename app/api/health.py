from fastapi import APIRouter, Depends

from app.api.topics import get_topic_query_service
from app.services.topic_query_service import TopicQueryService

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(service: TopicQueryService = Depends(get_topic_query_service)) -> dict:
    return {"status": "ok", "cached_queries": len(service.cache)}
