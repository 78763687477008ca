"""Pydantic models for media API responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from media.domain.aggregates import AssetPage, DeleteResult, MediaAsset, UploadResult
from media.domain.value_objects import format_timestamp


class UploadResponse(BaseModel):
    """Response model for a completed upload."""

    success: bool = True
    id: str = Field(..., description="Blob store id of the new image")
    filename: str = Field(..., description="Filename under which the blob is stored")
    uploaded: str = Field(..., description="Server-assigned upload time (ISO-8601)")

    @classmethod
    def from_domain(cls, result: UploadResult) -> UploadResponse:
        return cls(
            id=result.asset_id,
            filename=result.filename,
            uploaded=format_timestamp(result.uploaded),
        )


class DeleteResponse(BaseModel):
    """Response model for a delete.

    ``warning`` is present only when the blob could not be removed.
    """

    success: bool = True
    id: str
    message: str
    metadata_deleted: bool
    blob_deleted: bool
    warning: str | None = None

    @classmethod
    def from_domain(cls, result: DeleteResult) -> DeleteResponse:
        return cls(
            id=result.asset_id,
            message=(
                "Image deleted from database"
                if result.warning
                else "Image deleted successfully"
            ),
            metadata_deleted=result.metadata_deleted,
            blob_deleted=result.blob_deleted,
            warning=result.warning,
        )


class ImageLookupResponse(BaseModel):
    """Response model for a lookup by name."""

    success: bool = True
    id: str
    name: str
    captured: str
    uploaded: str

    @classmethod
    def from_domain(cls, asset: MediaAsset) -> ImageLookupResponse:
        return cls(
            id=asset.id,
            name=asset.name,
            captured=format_timestamp(asset.captured),
            uploaded=format_timestamp(asset.uploaded),
        )


class ImageResponse(BaseModel):
    id: str
    name: str
    caption: str | None = None
    captured: str
    uploaded: str

    @classmethod
    def from_domain(cls, asset: MediaAsset) -> ImageResponse:
        return cls(
            id=asset.id,
            name=asset.name,
            caption=asset.caption,
            captured=format_timestamp(asset.captured),
            uploaded=format_timestamp(asset.uploaded),
        )


class ImageListResponse(BaseModel):
    """One page of a tenant's images."""

    success: bool = True
    images: list[ImageResponse]
    has_more: bool

    @classmethod
    def from_domain(cls, page: AssetPage) -> ImageListResponse:
        return cls(
            images=[ImageResponse.from_domain(asset) for asset in page.items],
            has_more=page.has_more,
        )
