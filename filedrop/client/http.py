"""HTTP client for the filedrop upload endpoint."""

import logging

import httpx

from filedrop.core.exceptions import UploadRequestError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000"
UPLOAD_PATH = "/api/upload"


class UploadClient:
    """Posts files to ``/api/upload`` as multipart form data.

    Example:
        with UploadClient("http://localhost:5000") as client:
            url = client.upload("a.txt", b"hello", "text/plain")
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 60.0,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            api_url: Base URL of the filedrop API
            timeout: Request timeout in seconds
            http_client: Pre-built httpx client (its base URL is used as-is)
        """
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=api_url, timeout=timeout)

    def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> str:
        """Upload a file and return its public URL.

        Args:
            filename: Name the file is stored under
            content: File bytes
            content_type: Media type sent with the file part

        Returns:
            The ``fileUrl`` returned by the API

        Raises:
            UploadRequestError: On a transport failure, a non-200 response
                or a response without ``fileUrl``
        """
        part = (filename, content, content_type) if content_type else (filename, content)

        try:
            response = self._http.post(UPLOAD_PATH, files={"file": part})
        except httpx.HTTPError as e:
            raise UploadRequestError(f"Upload request failed: {e}", original_error=e) from e

        if response.status_code != 200:
            raise UploadRequestError(
                self._error_message(response),
                status_code=response.status_code,
            )

        try:
            file_url = response.json()["fileUrl"]
        except (ValueError, KeyError, TypeError) as e:
            raise UploadRequestError(
                "Upload response did not contain a file URL",
                status_code=response.status_code,
                original_error=e,
            ) from e

        logger.debug(f"Uploaded {filename} -> {file_url}")
        return file_url

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        error = body.get("error") if isinstance(body, dict) else None
        return error or f"Upload failed with status {response.status_code}"

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "UploadClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
