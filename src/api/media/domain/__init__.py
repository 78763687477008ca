"""Domain layer for the media bounded context."""

from media.domain.aggregates import AssetPage, DeleteResult, MediaAsset, UploadResult
from media.domain.value_objects import (
    ALLOWED_EXTENSIONS,
    MAX_FILE_SIZE_BYTES,
    DeleteState,
    OversizedFile,
    StoredFilename,
    UnsupportedExtension,
    UploadMetadata,
    UploadState,
)

__all__ = [
    "ALLOWED_EXTENSIONS",
    "AssetPage",
    "DeleteResult",
    "DeleteState",
    "MAX_FILE_SIZE_BYTES",
    "MediaAsset",
    "OversizedFile",
    "StoredFilename",
    "UnsupportedExtension",
    "UploadMetadata",
    "UploadResult",
    "UploadState",
]
