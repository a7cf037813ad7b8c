"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.dependencies import get_integration_service
from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.routes.health import router as health_router
from api.routes.tags import router as tags_router
from core.config import Settings, settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from domain.services.integration_service import IntegrationService
from infrastructure.database.session import check_connection, engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


async def verify_integration(service: IntegrationService, config: Settings) -> None:
    """Check the Notion relation before serving; raises on any mismatch."""
    if not config.notion_enabled:
        logger.info("integration_check_skipped", reason="no notion token")
        return

    try:
        await service.verify_relation(
            config.notion_tags_database,
            config.notion_taps_database,
            config.notion_tags_relation,
            config.notion_taps_relation,
        )
    except Exception:
        logger.exception("integration_check_failed")
        raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown tasks."""
    await check_connection()
    await verify_integration(get_integration_service(), settings)
    logger.info("application_started", host=settings.host, port=settings.port)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## NFC/QR tag redirects\n\n"
            "Each physical tag encodes `/tag/<id>` or `/tag/<id>x<tap-count>`, "
            "where `<id>` is 14 uppercase hex digits and `<tap-count>` six.\n\n"
            "- Known tags redirect permanently (308) to their target URL.\n"
            "- Unknown tags redirect temporarily (307) to `/tag/create`.\n"
            "- Malformed slugs are rejected with 400."
        ),
        version=settings.app_version,
        debug=settings.debug,
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "tags",
                "description": "Tag resolution and creation",
            },
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(RequestLoggingMiddleware)

    if settings.cors_origins_list:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins_list,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(tags_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
