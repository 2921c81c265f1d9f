"""HTTP routes for filedrop."""

from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel, ConfigDict, Field

from filedrop.core.exceptions import UploadValidationError
from filedrop.core.settings import FileDropSettings
from filedrop.fastapi.dependencies import (
    get_s3_client,
    get_settings,
    get_upload_service,
)
from filedrop.storage.uploads import ObjectUploadService

router = APIRouter()


class UploadResponse(BaseModel):
    """Body of a successful upload."""

    model_config = ConfigDict(populate_by_name=True)

    file_url: str = Field(alias="fileUrl")


class HealthResponse(BaseModel):
    status: str
    bucket: str


@router.post("/api/upload", response_model=UploadResponse, tags=["uploads"])
async def upload_file(
    file: UploadFile | None = File(None),
    service: ObjectUploadService = Depends(get_upload_service),
    s3_client=Depends(get_s3_client),
) -> UploadResponse:
    """Store one file in the bucket and return its public URL.

    The file is stored under its original name unless the service is
    configured with the prefixed key strategy.
    """
    if file is None:
        raise UploadValidationError("No file was provided", field="file")

    # One byte past the limit is enough to know the upload is too large
    content = await file.read(service.config.max_file_size + 1)
    record = service.build_record(file.filename, content, file.content_type)
    stored = await service.store(s3_client, record)

    return UploadResponse(file_url=stored.url)


@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health(settings: FileDropSettings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", bucket=settings.aws_bucket_name)
