"""FastAPI application factory for kamin_search."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from kamin_search import __version__
from kamin_search.config import Settings, get_settings
from kamin_search.routes import health, home, metrics, results, theme
from kamin_search.services.search import SearchClient, SearchClientProtocol
from kamin_search.utils.errors import (
    ApiError,
    api_error_handler,
    http_exception_handler,
    request_validation_exception_handler,
    unexpected_exception_handler,
)
from kamin_search.utils.logging import configure_logging, logging_middleware

OPENAPI_TAGS: list[dict[str, str]] = [
    {
        "name": "health",
        "description": "Monitoring endpoints exposing uptime and build metadata.",
    },
    {
        "name": "home",
        "description": "Landing view search box: validation, navigation and best-match shortcut.",
    },
    {
        "name": "results",
        "description": "Paginated results view driven by the address query string.",
    },
    {
        "name": "theme",
        "description": "Light/dark preference persisted in a cookie.",
    },
]


def create_app(
    settings: Settings | None = None,
    *,
    search_client: SearchClientProtocol | None = None,
) -> FastAPI:
    """Instantiate the FastAPI application with its routes and search client.

    ``settings`` and ``search_client`` default to the environment-driven
    configuration and an HTTP client pointed at ``settings.api_base_url``.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title="kamin-search",
        description="View-model API of the Kamin web search front-end.",
        version=__version__,
        default_response_class=ORJSONResponse,
        openapi_tags=OPENAPI_TAGS,
    )
    allowed_origins = list(settings.allowed_origins)
    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.middleware("http")(logging_middleware)

    app.state.settings = settings
    app.state.search_client = search_client or SearchClient(settings.api_base_url)

    app.include_router(health.router)
    app.include_router(metrics.router)
    app.include_router(home.router)
    app.include_router(results.router)
    app.include_router(theme.router)

    app.add_exception_handler(Exception, unexpected_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)

    return app
