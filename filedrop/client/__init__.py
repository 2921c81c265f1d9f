"""Client side of filedrop: an HTTP uploader and the upload form state machine."""

from filedrop.client.form import FormState, SelectedFile, UploadForm
from filedrop.client.http import UploadClient

__all__ = ["FormState", "SelectedFile", "UploadClient", "UploadForm"]
