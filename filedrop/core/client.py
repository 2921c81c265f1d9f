"""S3 client manager for handling S3 connections and operations."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, Protocol, runtime_checkable

from aiobotocore.client import AioBaseClient
from aiobotocore.session import get_session
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from filedrop.core.exceptions import (
    ConfigurationError,
    S3ConnectionError,
    StorageWriteError,
)
from filedrop.core.settings import FileDropSettings


@runtime_checkable
class S3ClientProtocol(Protocol):
    """Protocol for the S3 operations filedrop relies on."""

    async def put_object(
        self, Bucket: str, Key: str, Body: bytes | str, **kwargs
    ) -> dict[str, Any]:
        """Put an object to S3."""
        ...

    async def head_bucket(self, Bucket: str, **kwargs) -> dict[str, Any]:
        """Check that a bucket exists and is reachable."""
        ...


def adjust_endpoint_url(
    endpoint_url: str | None, bucket_name: str | None
) -> str | None:
    """Adjust endpoint URL for path-style addressing if needed.

    Args:
        endpoint_url: The S3 endpoint URL
        bucket_name: The S3 bucket name

    Returns:
        Adjusted endpoint URL or None
    """
    if not endpoint_url:
        return None
    if bucket_name and f"{bucket_name}." in endpoint_url:
        return endpoint_url.replace(f"{bucket_name}.", "")
    return endpoint_url


class S3ClientManager:
    """Creates async S3 clients from an explicit settings object.

    One manager is built at application start and shared by every request.
    It holds no per-request state; each call to ``get_async_client`` opens
    and closes its own client.
    """

    def __init__(self, settings: FileDropSettings):
        """Initialize the client manager with settings.

        Args:
            settings: filedrop settings
        """
        self.settings = settings
        self._session = None
        self._endpoint_url = adjust_endpoint_url(
            settings.aws_url, settings.aws_bucket_name
        )
        self._client_config = Config(
            s3={"addressing_style": "path"} if self._endpoint_url else {},
            # Writes are never retried.
            retries={"total_max_attempts": 1, "mode": "standard"},
        )

    @property
    def endpoint_url(self) -> str | None:
        return self._endpoint_url

    @asynccontextmanager
    async def get_async_client(self) -> AsyncGenerator[AioBaseClient, None]:
        """Get an async S3 client within a context manager.

        Only botocore failures are translated; any other exception raised
        by the caller inside the block propagates unchanged.

        Yields:
            An aiobotocore S3 client

        Raises:
            S3ConnectionError: If the client cannot reach S3
        """
        if self._session is None:
            self._session = get_session()

        try:
            async with self._session.create_client(
                "s3",
                region_name=self.settings.aws_default_region,
                aws_access_key_id=self.settings.aws_access_key_id,
                aws_secret_access_key=self.settings.aws_secret_access_key,
                endpoint_url=self._endpoint_url,
                config=self._client_config,
            ) as client:
                yield client
        except (ClientError, BotoCoreError) as e:
            raise S3ConnectionError(original_error=e, endpoint=self._endpoint_url) from e


async def check_bucket(s3_client: S3ClientProtocol, bucket_name: str) -> None:
    """Verify that the upload bucket exists and is reachable.

    Args:
        s3_client: The S3 client to use
        bucket_name: The bucket to check

    Raises:
        ConfigurationError: If the bucket does not exist
        StorageWriteError: If access to the bucket is denied
        S3ConnectionError: If S3 cannot be reached
    """
    try:
        await s3_client.head_bucket(Bucket=bucket_name)
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        if error_code in ("404", "NoSuchBucket", "NotFound"):
            raise ConfigurationError(f"Bucket '{bucket_name}' not found") from e
        if error_code in ("403", "AccessDenied"):
            raise StorageWriteError(
                f"Permission denied on bucket '{bucket_name}'", original_error=e
            ) from e
        raise S3ConnectionError(original_error=e) from e
    except BotoCoreError as e:
        raise S3ConnectionError(original_error=e) from e
