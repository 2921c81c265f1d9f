"""Upload form state machine.

The form moves between four states:

    IDLE      no file chosen
    READY     a file is chosen but not uploaded
    UPLOADED  the API returned a URL; download() opens it
    FAILED    the last upload failed; ``error`` holds the message to show

Selecting a file is allowed from any state and always lands in READY.
"""

import logging
import mimetypes
import webbrowser
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from filedrop.client.http import UploadClient
from filedrop.core.exceptions import InvalidTransitionError, UploadRequestError

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    IDLE = "idle"
    READY = "ready"
    UPLOADED = "uploaded"
    FAILED = "failed"


@dataclass(frozen=True)
class SelectedFile:
    """A file picked by the user."""

    filename: str
    content: bytes
    content_type: str | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> "SelectedFile":
        path = Path(path)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=mimetypes.guess_type(path.name)[0],
        )


class UploadForm:
    """Client-side view state for one file upload.

    No validation happens here; size and type checks are left to the API.

    Example:
        form = UploadForm(UploadClient("http://localhost:5000"))
        form.select(SelectedFile.from_path("report.pdf"))
        form.upload()
        if form.state is FormState.UPLOADED:
            form.download()
        elif form.state is FormState.FAILED:
            print(form.error)
            form.retry()
    """

    def __init__(
        self,
        uploader: UploadClient,
        opener: Callable[[str], object] | None = None,
    ):
        """Initialize the form.

        Args:
            uploader: Client used to post the file
            opener: Called with the file URL on download (defaults to
                opening a new browser tab)
        """
        self._uploader = uploader
        self._opener = opener or webbrowser.open_new_tab
        self.state = FormState.IDLE
        self.selected_file: SelectedFile | None = None
        self.file_url: str | None = None
        self.error: str | None = None

    @property
    def can_upload(self) -> bool:
        return self.state in (FormState.READY, FormState.FAILED)

    def select(self, selected: SelectedFile) -> None:
        self.selected_file = selected
        self.file_url = None
        self.error = None
        self.state = FormState.READY

    def upload(self) -> FormState:
        """Send the selected file to the API.

        Returns:
            UPLOADED on success, FAILED otherwise

        Raises:
            InvalidTransitionError: If no file is selected or the file has
                already been uploaded
        """
        if not self.can_upload:
            raise InvalidTransitionError("upload", self.state.value)

        selected = self.selected_file
        try:
            self.file_url = self._uploader.upload(
                selected.filename, selected.content, selected.content_type
            )
        except UploadRequestError as e:
            logger.error(f"Failed to upload {selected.filename}: {e}")
            self.error = e.message
            self.state = FormState.FAILED
            return self.state

        self.error = None
        self.state = FormState.UPLOADED
        return self.state

    def retry(self) -> FormState:
        if self.state is not FormState.FAILED:
            raise InvalidTransitionError("retry", self.state.value)
        return self.upload()

    def download(self) -> str:
        """Open the uploaded file's URL in a new browser tab.

        Returns:
            The URL that was opened
        """
        if self.state is not FormState.UPLOADED:
            raise InvalidTransitionError("download", self.state.value)
        self._opener(self.file_url)
        return self.file_url
