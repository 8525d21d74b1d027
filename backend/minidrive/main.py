"""MiniDrive Backend Application.

A small local file-sharing server: upload files or whole folders through a
browser form, browse them with inline previews, and download them back.

Modules:
    - files: storage root, path sanitization, upload/download routes
    - preview: HTML rendering of the index page
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from minidrive.config import AppConfig, get_config
from minidrive.files.router import router as files_router
from minidrive.files.service import FileStorageService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    config: AppConfig = app.state.config

    configured_level = getattr(logging, config.logging.level.upper(), None)
    if configured_level is not None:
        logging.getLogger().setLevel(configured_level)
        logger.info("Root logger level set to %s", config.logging.level.upper())

    logger.info(
        f"Mini Drive running at http://{config.server.host}:{config.server.port}/ "
        f"(storage: {config.storage.root_dir})"
    )

    yield  # Application runs here

    logger.info("Application shutdown complete")


async def plain_text_http_exception(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as plain text; unsupported methods become 404."""
    if exc.status_code == 405:
        return PlainTextResponse("Not found", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the application around an explicit configuration.

    The storage root is created here, before the first request.
    """
    if config is None:
        config = get_config()

    app = FastAPI(
        title="MiniDrive",
        description="Minimal local file-sharing server",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.config = config
    app.state.storage = FileStorageService(
        config.storage.root_dir,
        max_depth=config.storage.max_depth,
    )

    app.add_exception_handler(StarletteHTTPException, plain_text_http_exception)
    app.include_router(files_router)
    return app
