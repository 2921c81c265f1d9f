"""filedrop: upload files to S3 through a small FastAPI service and get back a public URL."""

__version__ = "0.1.0"

# Core components
from filedrop.core.client import S3ClientManager
from filedrop.core.exceptions import (
    ConfigurationError,
    FileDropError,
    InvalidTransitionError,
    S3ConnectionError,
    StorageWriteError,
    UploadRequestError,
    UploadTooLargeError,
    UploadValidationError,
)
from filedrop.core.settings import FileDropSettings

# Storage components
from filedrop.storage.uploads import (
    ObjectUploadService,
    StoredUpload,
    UploadConfig,
    UploadRecord,
)

# FastAPI integration
from filedrop.fastapi.app import create_filedrop_app

# Client components
from filedrop.client.form import FormState, SelectedFile, UploadForm
from filedrop.client.http import UploadClient

__all__ = [
    "__version__",
    # Core
    "S3ClientManager",
    "FileDropSettings",
    # Exceptions
    "FileDropError",
    "UploadValidationError",
    "UploadTooLargeError",
    "StorageWriteError",
    "S3ConnectionError",
    "ConfigurationError",
    "InvalidTransitionError",
    "UploadRequestError",
    # Storage
    "ObjectUploadService",
    "StoredUpload",
    "UploadConfig",
    "UploadRecord",
    # FastAPI
    "create_filedrop_app",
    # Client
    "FormState",
    "SelectedFile",
    "UploadClient",
    "UploadForm",
]
