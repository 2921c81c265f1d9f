"""Tests for the upload client and form state machine."""

from unittest.mock import MagicMock

import httpx
import pytest

from filedrop.client.form import FormState, SelectedFile, UploadForm
from filedrop.client.http import UploadClient
from filedrop.core.exceptions import InvalidTransitionError, UploadRequestError
from filedrop.testing.mocks import InMemoryS3


def make_client(handler) -> UploadClient:
    http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://api")
    return UploadClient(http_client=http)


class TestUploadClient:
    """Tests for UploadClient."""

    def test_posts_multipart_file_field(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            request.read()
            seen["path"] = request.url.path
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = request.content
            return httpx.Response(200, json={"fileUrl": "https://b.s3.amazonaws.com/a.txt"})

        url = make_client(handler).upload("a.txt", b"0123456789", "text/plain")

        assert url == "https://b.s3.amazonaws.com/a.txt"
        assert seen["path"] == "/api/upload"
        assert seen["content_type"].startswith("multipart/form-data")
        assert b'name="file"; filename="a.txt"' in seen["body"]
        assert b"Content-Type: text/plain" in seen["body"]
        assert b"0123456789" in seen["body"]

    def test_error_response(self):
        def handler(request):
            return httpx.Response(
                500, json={"error": "Failed to upload file to S3", "code": "storage_error"}
            )

        with pytest.raises(UploadRequestError) as exc_info:
            make_client(handler).upload("a.txt", b"hello")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to upload file to S3"

    def test_error_response_without_json(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(UploadRequestError) as exc_info:
            make_client(handler).upload("a.txt", b"hello")

        assert exc_info.value.message == "Upload failed with status 502"

    @pytest.mark.parametrize("body", [["Bad Gateway"], "Bad Gateway", 42])
    def test_error_response_with_non_object_json(self, body):
        def handler(request):
            return httpx.Response(502, json=body)

        with pytest.raises(UploadRequestError) as exc_info:
            make_client(handler).upload("a.txt", b"hello")

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Upload failed with status 502"

    def test_success_response_with_non_object_json(self):
        def handler(request):
            return httpx.Response(200, json=["https://b.s3.amazonaws.com/a.txt"])

        with pytest.raises(UploadRequestError, match="file URL"):
            make_client(handler).upload("a.txt", b"hello")

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UploadRequestError) as exc_info:
            make_client(handler).upload("a.txt", b"hello")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    def test_response_without_url(self):
        def handler(request):
            return httpx.Response(200, json={"ok": True})

        with pytest.raises(UploadRequestError, match="file URL"):
            make_client(handler).upload("a.txt", b"hello")

    def test_close_leaves_injected_client_open(self):
        http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with UploadClient(http_client=http):
            pass

        assert not http.is_closed


class TestSelectedFile:
    def test_from_path(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_bytes(b"hello")

        selected = SelectedFile.from_path(path)

        assert selected.filename == "notes.txt"
        assert selected.content == b"hello"
        assert selected.content_type == "text/plain"

    def test_from_path_unknown_type(self, tmp_path):
        path = tmp_path / "blob.zzzunknown"
        path.write_bytes(b"\x00")

        assert SelectedFile.from_path(path).content_type is None


class TestUploadForm:
    """Tests for the UploadForm state machine."""

    @pytest.fixture
    def uploader(self):
        uploader = MagicMock(spec=UploadClient)
        uploader.upload.return_value = "https://b.s3.amazonaws.com/a.txt"
        return uploader

    @pytest.fixture
    def opener(self):
        return MagicMock()

    @pytest.fixture
    def form(self, uploader, opener):
        return UploadForm(uploader, opener=opener)

    @pytest.fixture
    def selected(self):
        return SelectedFile("a.txt", b"0123456789", "text/plain")

    def test_starts_idle(self, form):
        assert form.state is FormState.IDLE
        assert form.file_url is None
        assert form.can_upload is False

    def test_upload_without_file_is_rejected(self, form, uploader):
        with pytest.raises(InvalidTransitionError):
            form.upload()

        uploader.upload.assert_not_called()

    def test_select_makes_ready(self, form, selected):
        form.select(selected)

        assert form.state is FormState.READY
        assert form.selected_file is selected
        assert form.can_upload is True

    def test_successful_upload(self, form, uploader, selected):
        form.select(selected)

        assert form.upload() is FormState.UPLOADED
        assert form.file_url == "https://b.s3.amazonaws.com/a.txt"
        assert form.error is None
        uploader.upload.assert_called_once_with("a.txt", b"0123456789", "text/plain")

    def test_download_opens_url(self, form, opener, selected):
        form.select(selected)
        form.upload()

        assert form.download() == "https://b.s3.amazonaws.com/a.txt"
        opener.assert_called_once_with("https://b.s3.amazonaws.com/a.txt")

    def test_download_before_upload_is_rejected(self, form, opener, selected):
        form.select(selected)

        with pytest.raises(InvalidTransitionError):
            form.download()

        opener.assert_not_called()

    def test_failed_upload_is_visible(self, form, uploader, selected):
        uploader.upload.side_effect = UploadRequestError(
            "Failed to upload file to S3", status_code=500
        )
        form.select(selected)

        assert form.upload() is FormState.FAILED
        assert form.error == "Failed to upload file to S3"
        assert form.file_url is None

        with pytest.raises(InvalidTransitionError):
            form.download()

    def test_retry_after_failure(self, form, uploader, selected):
        uploader.upload.side_effect = [
            UploadRequestError("Failed to upload file to S3", status_code=500),
            "https://b.s3.amazonaws.com/a.txt",
        ]
        form.select(selected)
        form.upload()

        assert form.retry() is FormState.UPLOADED
        assert form.error is None
        assert uploader.upload.call_count == 2

    def test_retry_only_after_failure(self, form, selected):
        form.select(selected)

        with pytest.raises(InvalidTransitionError):
            form.retry()

    def test_upload_twice_is_rejected(self, form, selected):
        form.select(selected)
        form.upload()

        with pytest.raises(InvalidTransitionError):
            form.upload()

    def test_selecting_new_file_resets(self, form, selected):
        form.select(selected)
        form.upload()

        form.select(SelectedFile("b.txt", b"other"))

        assert form.state is FormState.READY
        assert form.file_url is None


class TestFormAgainstApi:
    """The form driving the real app over a TestClient."""

    def test_upload_and_download(self, filedrop_test_app, mock_s3):
        opener = MagicMock()
        form = UploadForm(UploadClient(http_client=filedrop_test_app), opener=opener)

        form.select(SelectedFile("a.txt", b"0123456789", "text/plain"))
        form.upload()
        form.download()

        assert form.state is FormState.UPLOADED
        opener.assert_called_once_with("https://test-bucket.s3.amazonaws.com/a.txt")
        assert mock_s3.stored_object("test-bucket", "a.txt") == (b"0123456789", "text/plain")

    def test_storage_failure_then_retry(self, filedrop_test_app, mock_s3):
        form = UploadForm(UploadClient(http_client=filedrop_test_app), opener=MagicMock())
        form.select(SelectedFile("a.txt", b"hello", "text/plain"))

        mock_s3.fail_with(InMemoryS3.unreachable())
        assert form.upload() is FormState.FAILED
        assert form.error == "Failed to upload file to S3"

        mock_s3.fail_with(None)
        assert form.retry() is FormState.UPLOADED
        assert form.file_url == "https://test-bucket.s3.amazonaws.com/a.txt"

    def test_proxy_error_with_json_list_fails_form(self):
        client = make_client(lambda request: httpx.Response(502, json=["Bad Gateway"]))
        form = UploadForm(client, opener=MagicMock())
        form.select(SelectedFile("a.txt", b"hello", "text/plain"))

        assert form.upload() is FormState.FAILED
        assert form.error == "Upload failed with status 502"
