"""Shared fixtures for filedrop tests."""

from filedrop.testing.fixtures import (  # noqa: F401
    filedrop_settings,
    filedrop_test_app,
    mock_s3,
    s3_test_bucket,
)
