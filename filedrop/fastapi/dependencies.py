"""FastAPI dependencies for filedrop.

Everything is read from ``app.state``, which the app factory fills once at
startup. Tests replace ``get_s3_client`` through ``app.dependency_overrides``.
"""

from collections.abc import AsyncGenerator

from aiobotocore.client import AioBaseClient
from fastapi import Request

from filedrop.core.client import S3ClientManager
from filedrop.core.settings import FileDropSettings
from filedrop.storage.uploads import ObjectUploadService


def get_settings(request: Request) -> FileDropSettings:
    return request.app.state.settings


def get_upload_service(request: Request) -> ObjectUploadService:
    return request.app.state.upload_service


async def get_s3_client(request: Request) -> AsyncGenerator[AioBaseClient, None]:
    """Yield an S3 client for the duration of one request."""
    manager: S3ClientManager = request.app.state.s3_manager
    async with manager.get_async_client() as client:
        yield client
