"""Custom exceptions for filedrop.

This module provides a hierarchy of exceptions with helpful error messages
to make debugging easier for developers.
"""


class FileDropError(Exception):
    """Base exception for all filedrop errors.

    All filedrop exceptions inherit from this class, making it easy
    to catch all package-specific errors.
    """

    def __init__(self, message: str, hint: str | None = None):
        """Initialize the exception.

        Args:
            message: The error message
            hint: Optional hint for resolving the error
        """
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class UploadValidationError(FileDropError):
    """Raised when an upload is rejected before any storage call."""

    def __init__(self, message: str, field: str | None = None):
        """Initialize the validation error.

        Args:
            message: The error message
            field: The form field that failed validation
        """
        self.field = field

        hint = None
        if field:
            hint = f"Send the file in a multipart form field named '{field}'."

        super().__init__(message, hint)


class UploadTooLargeError(UploadValidationError):
    """Raised when an upload exceeds the configured size ceiling."""

    def __init__(self, size: int | None, max_size: int):
        """Initialize the size error.

        Args:
            size: The observed payload size, if known
            max_size: The configured ceiling in bytes
        """
        self.size = size
        self.max_size = max_size

        if size is None:
            message = f"Upload exceeds the maximum size of {max_size} bytes"
        else:
            message = f"Upload of {size} bytes exceeds the maximum size of {max_size} bytes"

        super().__init__(message)
        self.hint = f"Files must be at most {max_size // (1024 * 1024)} MiB."


class StorageWriteError(FileDropError):
    """Raised when writing an object to S3 does not complete.

    The message is deliberately opaque so it can be returned to callers;
    the underlying error is kept on ``original_error`` for logging.
    """

    def __init__(
        self,
        message: str = "Failed to upload file to S3",
        key: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the storage error.

        Args:
            message: The error message
            key: The S3 key involved in the write
            original_error: The original exception
        """
        self.key = key
        self.original_error = original_error
        super().__init__(message)


class S3ConnectionError(FileDropError):
    """Raised when there is an error connecting to S3.

    This exception wraps underlying connection errors with helpful
    context about what might be wrong.
    """

    def __init__(
        self,
        message: str | None = None,
        original_error: Exception | None = None,
        endpoint: str | None = None,
    ):
        """Initialize the connection error.

        Args:
            message: Custom error message (optional)
            original_error: The original exception that caused this error
            endpoint: The S3 endpoint URL being connected to
        """
        self.original_error = original_error
        self.endpoint = endpoint

        if message:
            final_message = message
            hint = None
        elif original_error:
            final_message, hint = self._format_error(original_error, endpoint)
        else:
            final_message = "Failed to connect to S3"
            hint = "Check your AWS credentials and network connection."

        super().__init__(final_message, hint)

    def _format_error(
        self, error: Exception, endpoint: str | None
    ) -> tuple[str, str | None]:
        """Format the error message based on the underlying error."""
        error_str = str(error)

        if "Could not connect" in error_str or "Connection refused" in error_str:
            if endpoint and "localhost" in endpoint:
                return (
                    f"Could not connect to S3 at {endpoint}",
                    "If using LocalStack, ensure it's running: docker run -d -p 4566:4566 localstack/localstack",
                )
            return (
                f"Could not connect to S3 at {endpoint or 'AWS'}",
                "Check your network connection and AWS endpoint configuration.",
            )

        if "InvalidAccessKeyId" in error_str:
            return (
                "Invalid AWS access key ID",
                "Check your AWS_ACCESS_KEY_ID environment variable.",
            )

        if "SignatureDoesNotMatch" in error_str:
            return (
                "AWS signature mismatch",
                "Check your AWS_SECRET_ACCESS_KEY environment variable.",
            )

        if "AccessDenied" in error_str:
            return (
                "Access denied to the upload bucket",
                "Check your IAM permissions for s3:PutObject.",
            )

        return (f"S3 connection error: {error}", None)


class ConfigurationError(FileDropError):
    """Raised when filedrop configuration is invalid."""

    def __init__(
        self,
        message: str | None = None,
        missing_fields: list[str] | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Custom error message
            missing_fields: List of missing configuration fields
        """
        self.missing_fields = missing_fields or []

        if missing_fields:
            fields_str = ", ".join(missing_fields)
            message = f"Missing required configuration: {fields_str}"
            hint = "Set these as environment variables or in your .env file."
        else:
            hint = "Check your filedrop configuration."

        super().__init__(message or "Invalid filedrop configuration", hint)


class InvalidTransitionError(FileDropError):
    """Raised when the upload form is asked to do something its state forbids."""

    def __init__(self, action: str, state: str):
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} while the form is {state}")


class UploadRequestError(FileDropError):
    """Raised by the HTTP client when the upload endpoint does not return a URL."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(message)
