"""HTTP status codes for media exceptions."""

from fastapi import status

from media.ports.exceptions import (
    AssetForbiddenError,
    AssetNotFoundError,
    BlobStoreError,
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

MEDIA_ERROR_STATUSES = {
    UploadError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InvalidMetadataError: status.HTTP_400_BAD_REQUEST,
    UnsupportedFileTypeError: status.HTTP_400_BAD_REQUEST,
    FileTooLargeError: status.HTTP_400_BAD_REQUEST,
    MissingUploadFileError: status.HTTP_400_BAD_REQUEST,
    BlobStoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    MetadataWriteFailedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    DeleteError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InvalidAssetIdError: status.HTTP_400_BAD_REQUEST,
    AssetForbiddenError: status.HTTP_403_FORBIDDEN,
    AssetNotFoundError: status.HTTP_404_NOT_FOUND,
    MetadataDeleteFailedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InvalidAssetNameError: status.HTTP_400_BAD_REQUEST,
    MediaStoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}
