from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogcraft import __version__
from blogcraft.api.errors import register_exception_handlers
from blogcraft.api.router import api_router
from blogcraft.core.config import settings
from blogcraft.core.db import init_models
from blogcraft.core.logging import get_logger, init_logging

logger = get_logger(__name__)

DESCRIPTION = "AI-assisted blog writing with versioned drafts and feedback history"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables before serving when configured to"""
    if settings.create_tables_on_startup:
        await init_models()
        logger.info("Database tables ensured")
    yield


def create_app() -> FastAPI:
    """Build the application with logging, CORS, error handlers and routers"""
    init_logging()

    app = FastAPI(
        title="BlogCraft",
        description=DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/")
    async def root():
        """Service information"""
        return {
            "message": "BlogCraft API",
            "version": __version__,
            "description": DESCRIPTION,
            "docs": "/docs",
            "health": "/health"
        }

    return app


app = create_app()
