"""Application factory for the filedrop API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from filedrop.core.client import S3ClientManager
from filedrop.core.settings import FileDropSettings
from filedrop.fastapi.error_handlers import register_error_handlers
from filedrop.fastapi.middleware import MULTIPART_OVERHEAD, RequestSizeLimitMiddleware
from filedrop.fastapi.routes import router
from filedrop.storage.uploads import ObjectUploadService, UploadConfig

logger = logging.getLogger(__name__)


def create_filedrop_app(
    settings: FileDropSettings | None = None,
    title: str = "filedrop API",
    description: str = "Upload files to S3 and get back a public URL",
) -> FastAPI:
    """Build the FastAPI application.

    Settings are validated here, once. The S3 client manager and the upload
    service are built from them and kept on ``app.state`` for the lifetime
    of the app.

    Args:
        settings: filedrop settings (read from the environment if omitted)
        title: OpenAPI title
        description: OpenAPI description

    Returns:
        The configured FastAPI app

    Raises:
        ConfigurationError: If required settings are missing
    """
    from filedrop import __version__

    settings = settings or FileDropSettings()
    settings.validate_required()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"filedrop {__version__} ready: bucket={settings.aws_bucket_name} "
            f"region={settings.aws_default_region} max_upload_size={settings.max_upload_size}"
        )
        yield
        logger.info("filedrop shutting down")

    app = FastAPI(
        title=title,
        description=description,
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.s3_manager = S3ClientManager(settings)
    app.state.upload_service = ObjectUploadService(
        settings.aws_bucket_name,
        UploadConfig.from_settings(settings),
    )

    app.add_middleware(
        RequestSizeLimitMiddleware,
        max_bytes=settings.max_upload_size + MULTIPART_OVERHEAD,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app, include_generic=not settings.debug)
    app.include_router(router)

    return app
