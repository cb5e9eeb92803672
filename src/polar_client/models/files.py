"""File upload models."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import PolarModel, PolarRequest


class FileService(str, Enum):
    DOWNLOADABLE = "downloadable"
    PRODUCT_MEDIA = "product_media"
    ORGANIZATION_AVATAR = "organization_avatar"


class FileUploadPart(PolarModel):
    number: int
    chunk_start: int
    chunk_end: int
    checksum_sha256_base64: str | None = None
    url: str | None = None
    expires_at: datetime | None = None
    headers: dict[str, str] = Field(default_factory=dict)


class FileUploadInfo(PolarModel):
    id: str
    path: str
    parts: list[FileUploadPart] = Field(default_factory=list)


class File(PolarModel):
    """Uploaded (or pending) file."""

    id: str
    organization_id: str | None = None
    name: str
    path: str | None = None
    mime_type: str
    size: int
    service: str | None = None
    is_uploaded: bool = False
    checksum_sha256_base64: str | None = None
    checksum_sha256_hex: str | None = None
    storage_version: str | None = None
    last_modified_at: datetime | None = None
    upload: FileUploadInfo | None = None
    created_at: datetime | None = None


class FileUploadPartCreate(PolarRequest):
    number: int = Field(ge=1)
    chunk_start: int = Field(ge=0)
    chunk_end: int = Field(ge=0)
    checksum_sha256_base64: str | None = None


class FileCreate(PolarRequest):
    name: str = Field(min_length=1)
    mime_type: str = Field(min_length=1)
    size: int = Field(ge=0)
    service: FileService
    checksum_sha256_base64: str | None = None
    organization_id: str | None = None
    upload: dict[str, list[FileUploadPartCreate]] = Field(default_factory=lambda: {"parts": []})


class FileUpdate(PolarRequest):
    name: str | None = None
    version: str | None = None


class FileUploadCompletedPart(PolarRequest):
    number: int
    checksum_etag: str
    checksum_sha256_base64: str | None = None


class FileUploadCompleted(PolarRequest):
    id: str
    path: str
    parts: list[FileUploadCompletedPart] = Field(default_factory=list)
