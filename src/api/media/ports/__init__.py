"""Ports for the media bounded context."""

from media.ports.exceptions import (
    AssetForbiddenError,
    AssetNotFoundError,
    BlobStoreError,
    BlobStoreRejectedError,
    BlobStoreUnavailableError,
    DeleteError,
    FileTooLargeError,
    InvalidAssetIdError,
    InvalidAssetNameError,
    InvalidMetadataError,
    MediaStoreError,
    MetadataDeleteFailedError,
    MetadataWriteFailedError,
    MissingUploadFileError,
    UnsupportedFileTypeError,
    UploadError,
)
from media.ports.repositories import IBlobStore, IMediaRepository

__all__ = [
    "AssetForbiddenError",
    "AssetNotFoundError",
    "BlobStoreError",
    "BlobStoreRejectedError",
    "BlobStoreUnavailableError",
    "DeleteError",
    "FileTooLargeError",
    "IBlobStore",
    "IMediaRepository",
    "InvalidAssetIdError",
    "InvalidAssetNameError",
    "InvalidMetadataError",
    "MediaStoreError",
    "MetadataDeleteFailedError",
    "MetadataWriteFailedError",
    "MissingUploadFileError",
    "UnsupportedFileTypeError",
    "UploadError",
]
