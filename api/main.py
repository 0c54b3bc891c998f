"""FastAPI application for the golf tournament API."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config import ClientBootstrap, ConfigurationError, Settings, configure_logging, load_settings
from config.context import create_context

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warm up the context on startup, close it on shutdown.

    A missing DATABASE_URL does not stop the app: the public config and
    VAPID key endpoints still work and data endpoints answer 503.
    """
    bootstrap: ClientBootstrap = app.state.bootstrap
    try:
        await bootstrap.get()
    except ConfigurationError as e:
        logger.warning("Starting without a database: %s", e)
    yield
    if bootstrap.resolved:
        context = await bootstrap.get()
        await context.close()
        bootstrap.reset()


async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"detail": "Internal server error"}, status_code=500)


def create_app(settings: Optional[Settings] = None, bootstrap: Optional[ClientBootstrap] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Golf Tournament API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.bootstrap = bootstrap or ClientBootstrap(lambda: create_context(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(Exception, unhandled_error)

    from api.routers import live, notifications, public, push, rounds, social, tournaments, upload
    app.include_router(public.router, prefix="/api", tags=["config"])
    app.include_router(push.router, prefix="/api/push", tags=["push"])
    app.include_router(tournaments.router, prefix="/api/tournaments", tags=["tournaments"])
    app.include_router(social.router, prefix="/api/tournaments", tags=["social"])
    app.include_router(rounds.router, prefix="/api/rounds", tags=["rounds"])
    app.include_router(rounds.achievements_router, prefix="/api/achievements", tags=["achievements"])
    app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])
    app.include_router(upload.router, prefix="/api/upload", tags=["upload"])
    app.include_router(live.router, prefix="/live", tags=["live"])

    app.mount(
        settings.upload_base_url,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/api/health")
    async def health():
        if not app.state.bootstrap.resolved:
            return {"status": "degraded", "database": False}
        context = await app.state.bootstrap.get()
        healthy = await context.pool.health_check() if context.pool else False
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
