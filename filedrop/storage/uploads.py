"""Server-side upload handling for filedrop."""

import logging
import uuid
from dataclasses import dataclass
from typing import Literal
from urllib.parse import quote

from botocore.exceptions import BotoCoreError, ClientError

from filedrop.core.exceptions import (
    StorageWriteError,
    UploadTooLargeError,
    UploadValidationError,
)
from filedrop.core.settings import DEFAULT_MAX_UPLOAD_SIZE, FileDropSettings

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class UploadConfig:
    """Configuration for file uploads.

    Attributes:
        max_file_size: Maximum file size in bytes (default: 25MB)
        key_strategy: "filename" stores under the original name, so a second
            upload with the same name replaces the first; "prefixed" puts a
            random segment in front of the name
        upload_prefix: S3 key prefix for uploads
        storage_domain: Host suffix used to build public URLs
    """

    max_file_size: int = DEFAULT_MAX_UPLOAD_SIZE
    key_strategy: Literal["filename", "prefixed"] = "filename"
    upload_prefix: str = ""
    storage_domain: str = "s3.amazonaws.com"

    @classmethod
    def from_settings(cls, settings: FileDropSettings) -> "UploadConfig":
        return cls(
            max_file_size=settings.max_upload_size,
            key_strategy=settings.key_strategy,
            upload_prefix=settings.upload_prefix,
            storage_domain=settings.aws_storage_domain,
        )


@dataclass(frozen=True)
class UploadRecord:
    """A file received from a client, held in memory for one request."""

    original_filename: str
    mime_type: str
    content: bytes

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class StoredUpload:
    """Result of a completed write."""

    key: str
    url: str
    size_bytes: int
    content_type: str


def encode_component(value: str) -> str:
    """Percent-encode a value the way ``encodeURIComponent`` does.

    Everything except letters, digits and ``-_.!~*'()`` is escaped,
    including ``/``.
    """
    return quote(value, safe="!*'()")


def encode_prefix(prefix: str) -> str:
    """Percent-encode a key prefix, keeping its ``/`` separators."""
    return "/".join(encode_component(segment) for segment in prefix.split("/"))


class ObjectUploadService:
    """Service that writes uploaded files to S3 and builds their public URLs.

    Example:
        service = ObjectUploadService(bucket_name, config)

        record = service.build_record("a.txt", b"hello", "text/plain")
        stored = await service.store(s3_client, record)

        # stored.url can be opened directly, without going through the API
    """

    def __init__(
        self,
        bucket_name: str,
        config: UploadConfig | None = None,
    ):
        """Initialize the upload service.

        Args:
            bucket_name: S3 bucket name
            config: Upload configuration
        """
        self.bucket_name = bucket_name
        self.config = config or UploadConfig()

    def build_record(
        self,
        filename: str | None,
        content: bytes,
        content_type: str | None = None,
    ) -> UploadRecord:
        """Validate an incoming file and wrap it in an UploadRecord.

        Args:
            filename: Original filename as sent by the client
            content: The file bytes
            content_type: Declared media type (forwarded as-is)

        Returns:
            The upload record

        Raises:
            UploadValidationError: If the filename is missing
            UploadTooLargeError: If the content exceeds max_file_size
        """
        if not filename:
            raise UploadValidationError("Uploaded file has no filename", field="file")

        if len(content) > self.config.max_file_size:
            raise UploadTooLargeError(len(content), self.config.max_file_size)

        return UploadRecord(
            original_filename=filename,
            mime_type=content_type or DEFAULT_CONTENT_TYPE,
            content=content,
        )

    def key_prefix(self) -> str:
        """Return the part of the key that precedes the filename.

        The ``prefixed`` strategy adds a fresh uuid segment on every call.
        """
        if self.config.key_strategy == "prefixed":
            return f"{self.config.upload_prefix}{uuid.uuid4().hex}/"
        return self.config.upload_prefix

    def object_key(self, filename: str) -> str:
        """Derive the S3 key for a filename.

        Args:
            filename: Original filename

        Returns:
            The S3 key
        """
        return self.key_prefix() + filename

    def public_url(self, filename: str, prefix: str = "") -> str:
        """Build the unauthenticated URL for an object.

        The filename is encoded as a single component, so a ``/`` inside it
        becomes ``%2F``. Only the prefix keeps its separators.

        Args:
            filename: Original filename
            prefix: Key prefix from ``key_prefix``

        Returns:
            https://{bucket}.{storage_domain}/{encoded prefix}{encoded filename}
        """
        return (
            f"https://{self.bucket_name}.{self.config.storage_domain}/"
            f"{encode_prefix(prefix)}{encode_component(filename)}"
        )

    async def store(self, s3_client, record: UploadRecord) -> StoredUpload:
        """Write a record to S3.

        The write is attempted once. An existing object under the same key
        is replaced.

        Args:
            s3_client: The S3 client to use
            record: The validated upload

        Returns:
            The stored key and its public URL

        Raises:
            StorageWriteError: If S3 rejects or never receives the write
        """
        prefix = self.key_prefix()
        key = prefix + record.original_filename

        try:
            response = await s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=record.content,
                ContentType=record.mime_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload {key} to bucket {self.bucket_name}: {e}")
            raise StorageWriteError(key=key, original_error=e) from e

        logger.info(
            f"Uploaded {key} ({record.size_bytes} bytes, {record.mime_type}) "
            f"to bucket {self.bucket_name}, etag={response.get('ETag')}"
        )

        return StoredUpload(
            key=key,
            url=self.public_url(record.original_filename, prefix),
            size_bytes=record.size_bytes,
            content_type=record.mime_type,
        )
