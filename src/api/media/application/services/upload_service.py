"""Media upload pipeline.

Writes the binary to the blob store first and the metadata row second. The
two stores share no transaction, so a failed metadata insert leaves an
orphaned blob that no row points at. Orphans are logged at error level and
never rolled back automatically.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from media.application.observability import DefaultMediaUploadProbe, MediaUploadProbe
from media.domain.aggregates import MediaAsset, UploadResult
from media.domain.value_objects import (
    OversizedFile,
    StoredFilename,
    UnsupportedExtension,
    UploadMetadata,
    format_timestamp,
    validate_upload_file,
)
from media.ports.exceptions import (
    BlobStoreError,
    FileTooLargeError,
    InvalidMetadataError,
    MediaStoreError,
    MetadataWriteFailedError,
    UnsupportedFileTypeError,
)
from media.ports.repositories import IBlobStore, IMediaRepository
from shared_kernel.auth.access_identity import Identity


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MediaUploadService:
    """Application service for uploading a photo on a tenant's behalf."""

    def __init__(
        self,
        repository: IMediaRepository,
        blob_store: IBlobStore,
        session: AsyncSession,
        probe: MediaUploadProbe | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize MediaUploadService with dependencies.

        Args:
            repository: Metadata repository
            blob_store: External blob store
            session: Database session for transaction management
            probe: Optional domain probe for observability
            clock: Source of the server-assigned upload timestamp
        """
        self._repository = repository
        self._blob_store = blob_store
        self._session = session
        self._probe = probe or DefaultMediaUploadProbe()
        self._clock = clock

    async def upload(
        self,
        tenant: str,
        identity: Identity,
        content: bytes,
        filename: str,
        content_type: str | None,
        metadata_json: str | None,
    ) -> UploadResult:
        """Validate and store a photo for ``tenant``.

        Validation runs metadata, then extension, then size, and touches no
        store. Cancellation before the metadata insert leaves nothing of ours
        persisted; from the insert onward the write runs to completion.

        Args:
            tenant: Authorized tenant username
            identity: Caller the tenant authorized
            content: File bytes
            filename: Client filename (only its extension is used)
            content_type: Declared MIME type
            metadata_json: JSON object with name, captured and optional caption

        Returns:
            UploadResult with the blob id and stored filename

        Raises:
            InvalidMetadataError: Metadata missing or invalid
            UnsupportedFileTypeError: Extension missing or not allowed
            FileTooLargeError: File over the size limit
            BlobStoreUnavailableError: Blob store unreachable
            BlobStoreRejectedError: Blob store refused the upload
            MetadataWriteFailedError: Blob written but metadata insert failed
        """
        metadata, extension = self._validate(tenant, content, filename, metadata_json)

        uploaded = self._clock()
        stored_filename = str(StoredFilename.build(tenant, metadata.name, extension))
        blob_metadata = {
            "name": metadata.name,
            "captured": metadata.captured_text,
            "username": tenant,
            "uploaded": format_timestamp(uploaded),
        }
        if metadata.caption is not None:
            blob_metadata["caption"] = metadata.caption

        try:
            blob_id, _ = await self._blob_store.upload(
                stored_filename, content, content_type, blob_metadata
            )
        except BlobStoreError as e:
            self._probe.blob_write_failed(
                tenant=tenant, filename=stored_filename, error=str(e)
            )
            raise

        asset = MediaAsset(
            id=blob_id,
            username=tenant,
            name=metadata.name,
            caption=metadata.caption,
            captured=metadata.captured,
            uploaded=uploaded,
        )
        await asyncio.shield(self._persist_metadata(asset, stored_filename))

        self._probe.upload_completed(
            tenant=tenant,
            caller_id=identity.caller_id,
            asset_id=blob_id,
            filename=stored_filename,
        )
        return UploadResult(asset_id=blob_id, filename=stored_filename, uploaded=uploaded)

    def _validate(
        self,
        tenant: str,
        content: bytes,
        filename: str,
        metadata_json: str | None,
    ) -> tuple[UploadMetadata, str]:
        if not metadata_json:
            self._probe.upload_rejected(
                tenant=tenant, reason="invalid_metadata", detail="missing"
            )
            raise InvalidMetadataError("Missing or invalid metadata")
        try:
            metadata = UploadMetadata.from_json(metadata_json)
        except ValueError as e:
            self._probe.upload_rejected(
                tenant=tenant, reason="invalid_metadata", detail=str(e)
            )
            raise InvalidMetadataError(str(e)) from e

        try:
            extension = validate_upload_file(filename, len(content))
        except UnsupportedExtension as e:
            self._probe.upload_rejected(
                tenant=tenant, reason="unsupported_file_type", detail=str(e)
            )
            raise UnsupportedFileTypeError(str(e)) from e
        except OversizedFile as e:
            self._probe.upload_rejected(
                tenant=tenant, reason="file_too_large", detail=str(e)
            )
            raise FileTooLargeError(str(e)) from e

        return metadata, extension

    async def _persist_metadata(self, asset: MediaAsset, filename: str) -> None:
        # Runs shielded; the orphan event must fire even if the request is gone.
        try:
            async with self._session.begin():
                await self._repository.add(asset)
        except (MediaStoreError, SQLAlchemyError) as e:
            self._probe.orphaned_blob(
                tenant=asset.username,
                blob_id=asset.id,
                filename=filename,
                error=str(e),
            )
            raise MetadataWriteFailedError(blob_id=asset.id) from e
