"""Exceptions for the media bounded context.

Upload and delete failures each have a base class so callers can handle a
whole pipeline's failures at once. The shared error handlers map every class
here to an HTTP status.
"""


class UploadError(Exception):
    """Base class for upload pipeline failures."""

    pass


class InvalidMetadataError(UploadError):
    """Metadata form field is missing, not JSON, or has invalid fields."""

    pass


class UnsupportedFileTypeError(UploadError):
    """File extension is missing or not in the allowed set."""

    pass


class FileTooLargeError(UploadError):
    """File exceeds the upload size limit."""

    pass


class MissingUploadFileError(UploadError):
    """Request carries no file part."""

    pass


class BlobStoreError(UploadError):
    """Base class for blob store failures.

    ``reason`` is the store's own description of the failure.
    """

    def __init__(self, message: str, reason: str | None = None):
        super().__init__(message)
        self.reason = reason or message


class BlobStoreUnavailableError(BlobStoreError):
    """Blob store could not be reached. Nothing was persisted."""

    pass


class BlobStoreRejectedError(BlobStoreError):
    """Blob store answered with a non-success response. Nothing was persisted."""

    pass


class MetadataWriteFailedError(UploadError):
    """Blob was written but its metadata row was not.

    The blob is orphaned and needs manual cleanup; ``blob_id`` is kept for
    logging only and is never returned to the caller.
    """

    def __init__(self, blob_id: str, message: str = "Failed to save image metadata"):
        super().__init__(message)
        self.blob_id = blob_id


class DeleteError(Exception):
    """Base class for delete pipeline failures."""

    pass


class InvalidAssetIdError(DeleteError):
    """Asset id is empty after trimming."""

    pass


class AssetNotFoundError(DeleteError):
    """No asset with the requested id or name exists for the tenant."""

    pass


class AssetForbiddenError(DeleteError):
    """Asset exists but belongs to another tenant.

    The message never names the owner; ``owner`` is for server-side
    logging only.
    """

    def __init__(self, asset_id: str, owner: str):
        super().__init__("Forbidden")
        self.asset_id = asset_id
        self.owner = owner


class MetadataDeleteFailedError(DeleteError):
    """Metadata row could not be deleted. The blob was left untouched."""

    pass


class InvalidAssetNameError(Exception):
    """Name lookup with an empty name."""

    pass


class MediaStoreError(Exception):
    """Relational media store failed to execute a statement."""

    pass
