"""Pytest fixtures for filedrop testing.

To use these fixtures, add to your conftest.py:

    pytest_plugins = ["filedrop.testing.fixtures"]
"""

import pytest

from filedrop.core.settings import FileDropSettings
from filedrop.testing.mocks import InMemoryS3
from filedrop.testing.utils import create_test_app, create_test_settings


@pytest.fixture
def s3_test_bucket() -> str:
    """Provide test bucket name."""
    return "test-bucket"


@pytest.fixture
def filedrop_settings(s3_test_bucket: str) -> FileDropSettings:
    """Provide test settings for filedrop.

    Returns:
        FileDropSettings instance configured for testing
    """
    return create_test_settings(bucket_name=s3_test_bucket)


@pytest.fixture
def mock_s3(s3_test_bucket: str) -> InMemoryS3:
    """Provide in-memory S3 mock with the test bucket already created.

    Returns:
        InMemoryS3 instance
    """
    s3 = InMemoryS3()
    s3._ensure_bucket(s3_test_bucket)
    yield s3
    s3.clear()


@pytest.fixture
def filedrop_test_app(
    filedrop_settings: FileDropSettings,
    mock_s3: InMemoryS3,
):
    """Provide a FastAPI TestClient with mocked S3.

    Yields:
        FastAPI TestClient with mocked S3
    """
    from fastapi.testclient import TestClient

    app = create_test_app(filedrop_settings, mock_s3)

    with TestClient(app) as client:
        yield client
