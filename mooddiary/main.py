"""
FastAPI entrypoint for the Mood Diary backend application.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from mooddiary.core.config import settings
from mooddiary.core.cors import AppCORSMiddleware
from mooddiary.api.router import api_router
from mooddiary.api.routes.analysis import ANALYZE_MOOD_PATH
from mooddiary.db.session import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.APP_NAME} started")
    yield


def create_app() -> FastAPI:
    """Build the application from the current settings."""
    app = FastAPI(
        title="Mood Diary API",
        description="Backend API for a personal diary with AI mood analysis",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan
    )

    # CORS middleware; the analysis endpoint is open to every origin
    app.add_middleware(
        AppCORSMiddleware,
        exempt_paths=[API_PREFIX + ANALYZE_MOOD_PATH],
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routes
    app.include_router(api_router, prefix=API_PREFIX)

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"message": "Mood Diary API is running"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
