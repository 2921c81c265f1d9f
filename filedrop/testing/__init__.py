"""Testing utilities for filedrop applications.

Usage in conftest.py:
    from filedrop.testing import mock_s3_client, create_test_settings

    @pytest.fixture
    def s3_client():
        with mock_s3_client() as client:
            yield client

Or use provided fixtures directly:
    pytest_plugins = ["filedrop.testing.fixtures"]
"""

from filedrop.testing.mocks import InMemoryS3, mock_s3_client
from filedrop.testing.utils import create_test_app, create_test_settings

__all__ = [
    "InMemoryS3",
    "mock_s3_client",
    "create_test_app",
    "create_test_settings",
]
