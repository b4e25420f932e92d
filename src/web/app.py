"""
FastAPI web application for listing and exporting YouTube playlists.

Authenticates against the YouTube Data API with OAuth2, reads the user's
playlists and exports them as JSON, CSV or M3U.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.config import Config
from src.services.auth_service import AuthService
from src.services.export_service import ExportService
from src.services.playlist_service import PlaylistService
from src.web.auth_routes import router as auth_router
from src.web.error_handlers import install_error_handlers
from src.web.export_routes import router as export_router
from src.web.models import HealthResponse
from src.web.playlist_routes import router as playlist_router
from src.youtube.oauth import TokenManager

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(numeric_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Handles startup logging and cleanup.
    """
    config: Config = app.state.config
    logger.info(
        f"Application started (environment={config.ENVIRONMENT}, "
        f"credentials={config.GOOGLE_CREDENTIALS_FILE}, token={config.TOKEN_FILE})"
    )

    yield

    logger.info("Application shutdown")


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Build the application with its services stored in app.state."""
    config = config or Config()
    configure_logging(config.LOG_LEVEL)

    app = FastAPI(
        title="Playlist Export API",
        description="List YouTube playlists and export them as JSON, CSV or M3U",
        version=config.APP_VERSION,
        lifespan=lifespan,
        docs_url=None if config.is_production else "/docs",
        redoc_url=None if config.is_production else "/redoc",
    )

    install_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=config.allowed_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
        )
        return response

    # Store config and services in app state for access in routes
    token_manager = TokenManager(
        credentials_file=config.GOOGLE_CREDENTIALS_FILE,
        token_file=config.TOKEN_FILE,
        scopes=config.YOUTUBE_SCOPES,
    )
    playlist_service = PlaylistService(items_page_size=config.PLAYLIST_ITEMS_PAGE_SIZE)

    app.state.config = config
    app.state.auth_service = AuthService(token_manager)
    app.state.playlist_service = playlist_service
    app.state.export_service = ExportService(playlist_service)

    app.include_router(auth_router)
    app.include_router(playlist_router)
    app.include_router(export_router)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint for container orchestration."""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            version=config.APP_VERSION,
        )

    return app


app = create_app()
