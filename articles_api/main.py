import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from articles_api import __version__
from articles_api.config import Settings, get_settings
from articles_api.database import (
    build_engine,
    build_session_factory,
    init_models,
    wait_for_database,
)
from articles_api.exception_handlers import register_exception_handlers
from articles_api.logging_config import setup_logging
from articles_api.middleware import RequestMetrics, TimingMiddleware
from articles_api.routers import articles, metrics

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application and everything it owns.

    The engine, session factory and metrics registry are created here and
    kept on ``app.state``; nothing is module-global, so several apps (one
    per test, say) can coexist.  Serve with
    ``uvicorn --factory articles_api.main:create_app`` or
    ``python -m articles_api``.
    """
    settings = settings or get_settings()
    engine = build_engine(settings)
    request_metrics = RequestMetrics()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        setup_logging(settings)
        logger.info("Application starting: env=%s", settings.APP_ENV)
        await wait_for_database(
            engine,
            retries=settings.DB_CONNECT_RETRIES,
            delay=settings.DB_CONNECT_RETRY_DELAY,
        )
        if settings.DB_AUTO_CREATE:
            await init_models(engine)
        yield
        # Shutdown
        await engine.dispose()

    app = FastAPI(
        title="Articles API",
        description="Create articles and fetch them by id",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.metrics = request_metrics

    # Middleware
    app.add_middleware(TimingMiddleware, metrics=request_metrics)

    register_exception_handlers(app)

    # Routers
    app.include_router(articles.router)
    app.include_router(metrics.router)

    @app.get("/health")
    async def health():
        return {"status": "alive"}

    return app
