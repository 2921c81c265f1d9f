"""Storage utilities for filedrop.

This module writes uploaded files to S3 and builds the public URLs that
clients use to download them.
"""

from filedrop.storage.uploads import (
    ObjectUploadService,
    StoredUpload,
    UploadConfig,
    UploadRecord,
)

__all__ = ["ObjectUploadService", "StoredUpload", "UploadConfig", "UploadRecord"]
