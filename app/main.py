"""Entry point for the FastAPI-powered catalog API."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, Awaitable, Callable

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .errors import AddressError, NotFound, SourceUnavailable
from .models import CatalogModel
from .services.catalog import CatalogService, create_source

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    store_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            timeout=httpx.Timeout(settings.store_timeout_seconds, connect=5.0),
        )
    )
    source = create_source(settings, store_client)
    fastapi_app.state.catalog_service = CatalogService(
        source, series_ids=settings.static_series_ids
    )
    logger.info("Starting %s API server, data source: %s", settings.app_name, source.description)

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Anime and movie streaming catalog API",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_catalog_service(app: FastAPI) -> CatalogService:
    service = getattr(app.state, "catalog_service", None)
    if not isinstance(service, CatalogService):
        raise RuntimeError("Catalog service not initialised")
    return service


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _serialize(payload: CatalogModel | list[CatalogModel]) -> Any:
    if isinstance(payload, list):
        return [item.to_payload() for item in payload]
    return payload.to_payload()


async def _respond(
    call: Callable[[], Awaitable[CatalogModel | list[CatalogModel]]],
    failure_message: str,
) -> JSONResponse:
    try:
        payload = await call()
    except (SourceUnavailable, ValidationError):
        logger.exception(failure_message)
        return _error_response(500, failure_message)
    return JSONResponse(_serialize(payload))


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.exception_handler(NotFound)
    async def not_found_handler(_: Request, exc: NotFound) -> JSONResponse:
        return _error_response(404, exc.message)

    @fastapi_app.exception_handler(AddressError)
    async def address_error_handler(_: Request, exc: AddressError) -> JSONResponse:
        return _error_response(400, exc.message)

    @fastapi_app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        _: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404:
            return _error_response(404, "Endpoint not found")
        return _error_response(exc.status_code, str(exc.detail))

    @fastapi_app.get("/")
    async def index() -> dict[str, Any]:
        service = get_catalog_service(fastapi_app)
        return {
            "message": f"{settings.app_name} API Server",
            "status": "running",
            "database": service.source.description,
            "endpoints": {
                "library": "/api/library",
                "series": "/api/series/:slug",
                "movies": "/api/movies/:slug",
                "episode": "/api/series/:slug/episode/:season-:episode",
                "suggestions": "/api/series/:slug/suggestions",
                "latestEpisodes": "/api/latest-episodes",
            },
        }

    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        service = get_catalog_service(fastapi_app)
        return {"status": "ok", "source": service.source.kind}

    @fastapi_app.get("/api/library")
    async def library() -> JSONResponse:
        service = get_catalog_service(fastapi_app)
        return await _respond(service.library, "Failed to fetch library")

    @fastapi_app.get("/api/series/{slug}")
    async def series_detail(slug: str) -> JSONResponse:
        service = get_catalog_service(fastapi_app)
        return await _respond(
            lambda: service.series_detail(slug), "Failed to fetch series"
        )

    @fastapi_app.get("/api/series/{slug}/episode/{address}")
    async def episode(slug: str, address: str) -> JSONResponse:
        service = get_catalog_service(fastapi_app)
        return await _respond(
            lambda: service.episode(slug, address), "Failed to fetch episode"
        )

    @fastapi_app.get("/api/series/{slug}/suggestions")
    async def suggestions(slug: str) -> JSONResponse:
        service = get_catalog_service(fastapi_app)
        return await _respond(
            lambda: service.suggestions(slug), "Failed to fetch suggestions"
        )

    @fastapi_app.get("/api/movies/{slug}")
    async def movie_detail(slug: str) -> JSONResponse:
        service = get_catalog_service(fastapi_app)
        return await _respond(
            lambda: service.movie_detail(slug), "Failed to fetch movie"
        )

    @fastapi_app.get("/api/latest-episodes")
    async def latest_episodes() -> JSONResponse:
        service = get_catalog_service(fastapi_app)
        return await _respond(
            service.latest_episodes, "Failed to fetch latest episodes"
        )


app = create_app()

