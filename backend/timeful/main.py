"""FastAPI application entry point: middleware, API routes and the built frontend.

Usage:
    timeful-server [--release]

or, for auto-reload during development:
    uvicorn --factory timeful.main:create_app --reload
"""

import argparse
import logging
import sys
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Optional, Sequence

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from timeful.assets import publish_assets
from timeful.config import Settings, env_file_exists, load_settings
from timeful.context import ServerContext
from timeful.database import create_engine_for, create_session_factory, init_db
from timeful.errors import StartupError
from timeful.logger import configure_logging
from timeful.meta import MetaResolver
from timeful.middleware import RecoveryMiddleware, RequestLoggingMiddleware
from timeful.routers import events, health
from timeful.spa import install_fallback
from timeful.tasks import create_task_queue

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    ctx: ServerContext = app.state.context
    async with AsyncExitStack() as stack:
        # Registered first so they run even if a later startup step fails
        stack.push_async_callback(ctx.engine.dispose)
        stack.callback(ctx.task_queue.close)

        await init_db(ctx.engine)
        logger.info(f"Timeful API ready ({'release' if ctx.settings.RELEASE else 'debug'} mode)")
        yield
        logger.info("Shutting down Timeful API")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and everything it depends on.

    Raises StartupError if the frontend build exists but its entry point
    cannot be loaded.
    """
    settings = settings or load_settings()

    engine = create_engine_for(settings)
    ctx = ServerContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
        task_queue=create_task_queue(settings),
    )

    app = FastAPI(
        title="Timeful API",
        description="This is the API for Timeful!",
        version="1.0",
        debug=not settings.RELEASE,
        lifespan=lifespan,
        docs_url="/swagger/index.html",
        openapi_url="/swagger/doc.json",
        redoc_url=None,
    )
    app.state.context = ctx

    # Middleware is added innermost first: the request passes through
    # logging -> recovery -> CORS -> session.
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie=settings.SESSION_COOKIE,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Authorization"],
    )
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Register API routers
    api_router = APIRouter(prefix=API_PREFIX)
    api_router.include_router(health.router)
    api_router.include_router(events.router)
    app.include_router(api_router)

    @app.get("/swagger", include_in_schema=False)
    async def swagger_index():
        return RedirectResponse(url="/swagger/index.html")

    # ── Frontend SPA serving ─────────────────────────────────────────────
    # In dev the frontend runs on its own server and the build is absent.
    publish_assets(app, ctx)
    if ctx.serves_frontend:
        install_fallback(app, ctx, MetaResolver(ctx.session_factory, settings))

    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the Timeful API server.")
    parser.add_argument(
        "--release",
        action="store_true",
        help="Whether this is the release version of the server",
    )
    args = parser.parse_args(argv)

    overrides = {"RELEASE": True} if args.release else {}
    try:
        settings = load_settings(**overrides)
        configure_logging(settings)
        if not env_file_exists():
            logger.warning("No .env file found, using environment variables")
        app = create_app(settings)
    except StartupError as e:
        logger.critical(str(e))
        return 1

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
        access_log=False,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
