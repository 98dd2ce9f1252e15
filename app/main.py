from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from app.api.topics import router as topics_router
from app.api.health import router as health_router
from app.config.settings import settings
from app.core.exceptions.exceptions import InvalidInputError, StoreUnavailableError
from app.services.result_cache import ResultCache
from app.services.topic_query_service import TopicQueryService
from app.services.topic_store import build_topic_store
from app.utils.log import app_logger


def build_service() -> TopicQueryService:
    store = build_topic_store(settings.TOPICS_FILE, settings.TOPICS_SNAPSHOT_TTL_SECONDS)
    cache = ResultCache(ttl_seconds=settings.CACHE_TTL_SECONDS)
    return TopicQueryService(
        cache=cache,
        load_snapshot=store.load_snapshot,
        default_limit=settings.DEFAULT_PAGE_LIMIT,
        max_limit=settings.MAX_PAGE_LIMIT,
    )


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    # client error, not a server fault
    app_logger.debug("api.topics.invalid_input", path=request.url.path)
    return JSONResponse(status_code=400, content={"error": exc.message})


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    app_logger.error("api.topics.store_unavailable", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(service: Optional[TopicQueryService] = None) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup logic
        app.state.topic_query_service = service or build_service()
        app_logger.info("app.startup", topics_file=settings.TOPICS_FILE)
        yield
        # Shutdown logic
        app.state.topic_query_service.cache.flush()
        app_logger.info("app.shutdown")

    app = FastAPI(
        title="Topics API",
        version="1.0.0",
        description="A simple API to search programming topics by name",
        lifespan=lifespan,
    )

    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)

    # include routes
    app.include_router(topics_router)
    app.include_router(health_router)
    return app


app = create_app()
