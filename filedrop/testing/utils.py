"""Testing utilities for filedrop applications."""

from filedrop.core.settings import FileDropSettings
from filedrop.testing.mocks import InMemoryS3


def create_test_settings(
    bucket_name: str = "test-bucket",
    **overrides
) -> FileDropSettings:
    """Create filedrop settings for testing.

    Environment variables and ``.env`` are ignored so tests behave the same
    on every machine.

    Args:
        bucket_name: The S3 bucket name for tests
        **overrides: Additional settings to override

    Returns:
        FileDropSettings instance configured for testing
    """
    values = {
        "aws_bucket_name": bucket_name,
        "aws_access_key_id": "testing",
        "aws_secret_access_key": "testing",
        "aws_default_region": "us-east-1",
        **overrides,
    }
    return FileDropSettings(_env_file=None, **values)


def create_test_app(settings: FileDropSettings, s3_client: InMemoryS3):
    """Build the filedrop app with its S3 dependency replaced by ``s3_client``.

    Args:
        settings: Settings for the app
        s3_client: The mock S3 client every request should use

    Returns:
        The FastAPI app
    """
    from filedrop.fastapi.app import create_filedrop_app
    from filedrop.fastapi.dependencies import get_s3_client

    app = create_filedrop_app(settings=settings, title="Test App")

    async def override_get_s3_client():
        yield s3_client

    app.dependency_overrides[get_s3_client] = override_get_s3_client
    return app
