"""Settings for filedrop.

Settings are read from the environment (and an optional ``.env`` file) once,
when the object is constructed, and then passed explicitly to the app
factory and the S3 client manager.
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from filedrop.core.exceptions import ConfigurationError

DEFAULT_MAX_UPLOAD_SIZE = 25 * 1024 * 1024  # 25MB


class FileDropSettings(BaseSettings):
    """Runtime configuration for the upload service.

    The ``AWS_ACCOUNT_*`` names are accepted alongside the standard AWS
    variable names so existing deployments keep working.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # S3
    aws_bucket_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("aws_bucket_name", "AWS_BUCKET_NAME"),
    )
    aws_default_region: str = Field(
        default="us-east-1",
        validation_alias=AliasChoices(
            "aws_default_region", "AWS_DEFAULT_REGION", "AWS_ACCOUNT_REGION"
        ),
    )
    aws_access_key_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "aws_access_key_id", "AWS_ACCESS_KEY_ID", "AWS_ACCOUNT_ACCESS_KEY"
        ),
    )
    aws_secret_access_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "aws_secret_access_key",
            "AWS_SECRET_ACCESS_KEY",
            "AWS_ACCOUNT_SECRET_ACCESS_KEY",
        ),
    )
    aws_url: str | None = None
    aws_storage_domain: str = "s3.amazonaws.com"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    allowed_origins: str = "*"
    log_level: str = "INFO"
    debug: bool = False

    # Uploads
    max_upload_size: int = Field(default=DEFAULT_MAX_UPLOAD_SIZE, gt=0)
    key_strategy: Literal["filename", "prefixed"] = "filename"
    upload_prefix: str = ""

    @property
    def origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def validate_required(self) -> None:
        """Check that everything needed to serve uploads is present.

        Raises:
            ConfigurationError: If a required value is missing or the
                credential pair is only half set
        """
        missing = []
        if not self.aws_bucket_name:
            missing.append("AWS_BUCKET_NAME")
        if missing:
            raise ConfigurationError(missing_fields=missing)

        if bool(self.aws_access_key_id) != bool(self.aws_secret_access_key):
            raise ConfigurationError(
                "AWS access key ID and secret access key must be set together"
            )
