"""Content Ops Backend - FastAPI Entry Point."""
import logging
import sys

# asyncpg is incompatible with Windows ProactorEventLoop (default on Windows).
# Must be set before any asyncio usage.
if sys.platform == "win32":
    import asyncio
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import structlog
from fastapi import FastAPI

from contentops.config import settings
from contentops.database import engine
from contentops.middleware.cors import setup_cors
from contentops.middleware.error_handler import setup_error_handlers
from contentops.middleware.logging_middleware import LoggingMiddleware
from contentops.middleware.metrics import MetricsMiddleware, setup_metrics
from contentops.api.v1 import analytics as analytics_router
from contentops.api.v1 import contents as contents_router
from contentops.api.v1 import sources as sources_router

logger = structlog.get_logger()


def configure_logging() -> None:
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
            if settings.APP_ENV == "production"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info("startup", env=settings.APP_ENV)
    if settings.SENTRY_DSN:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration

        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[FastApiIntegration()],
            traces_sample_rate=0.1 if settings.APP_ENV == "production" else 1.0,
            environment=settings.APP_ENV,
        )

    yield

    await engine.dispose()
    logger.info("shutdown")


def create_app() -> FastAPI:
    configure_logging()
    application = FastAPI(
        title="Content Ops API",
        description="Content marketing operations: content pipeline and CSV analytics",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Middleware (order matters: last added = first executed)
    setup_cors(application)
    setup_error_handlers(application)
    application.add_middleware(LoggingMiddleware)
    application.add_middleware(MetricsMiddleware)

    setup_metrics(application)

    # API Routers
    application.include_router(contents_router.router, prefix="/api/v1/contents", tags=["Contents"])
    application.include_router(analytics_router.router, prefix="/api/v1/analytics", tags=["Analytics"])
    application.include_router(sources_router.router, prefix="/api/v1/sources", tags=["Sources"])

    # Health check
    @application.get("/health", tags=["health"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
