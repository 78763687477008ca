"""Media delete pipeline.

Ownership is verified against the metadata row, the row is deleted, and only
then is the blob removed. The row is the authoritative "exists" state, so a
failed blob delete downgrades to a warning on an otherwise successful result.
"""

from __future__ import annotations

import asyncio

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from media.application.observability import DefaultMediaDeleteProbe, MediaDeleteProbe
from media.domain.aggregates import DeleteResult
from media.ports.exceptions import (
    AssetForbiddenError,
    AssetNotFoundError,
    BlobStoreError,
    InvalidAssetIdError,
    MediaStoreError,
    MetadataDeleteFailedError,
)
from media.ports.repositories import IBlobStore, IMediaRepository
from shared_kernel.auth.access_identity import Identity


class MediaDeleteService:
    """Application service for deleting a tenant's photo."""

    def __init__(
        self,
        repository: IMediaRepository,
        blob_store: IBlobStore,
        session: AsyncSession,
        probe: MediaDeleteProbe | None = None,
    ):
        self._repository = repository
        self._blob_store = blob_store
        self._session = session
        self._probe = probe or DefaultMediaDeleteProbe()

    async def delete(
        self,
        tenant: str,
        identity: Identity,
        asset_id: str,
    ) -> DeleteResult:
        """Delete one of ``tenant``'s assets.

        Args:
            tenant: Authorized tenant username
            identity: Caller the tenant authorized
            asset_id: Blob id of the asset

        Returns:
            DeleteResult; ``warning`` is set when the blob could not be removed

        Raises:
            InvalidAssetIdError: Empty asset id
            AssetForbiddenError: Asset belongs to another tenant
            AssetNotFoundError: No asset with this id exists
            MetadataDeleteFailedError: Row could not be deleted; blob untouched
        """
        asset_id = (asset_id or "").strip()
        if not asset_id:
            self._probe.delete_rejected(tenant=tenant, reason="invalid_asset_id")
            raise InvalidAssetIdError("Invalid image ID")

        await self._verify_ownership(tenant, identity, asset_id)

        return await asyncio.shield(
            self._delete_verified(tenant, identity.caller_id, asset_id)
        )

    async def _verify_ownership(
        self, tenant: str, identity: Identity, asset_id: str
    ) -> None:
        async with self._session.begin():
            owned = await self._repository.get_owned(asset_id, tenant)
            if owned is not None:
                return
            existing = await self._repository.get_by_id(asset_id)

        if existing is not None:
            self._probe.foreign_asset_delete_attempt(
                tenant=tenant,
                caller_id=identity.caller_id,
                asset_id=asset_id,
                owner=existing.username,
            )
            raise AssetForbiddenError(asset_id=asset_id, owner=existing.username)

        self._probe.asset_not_found(tenant=tenant, asset_id=asset_id)
        raise AssetNotFoundError("Image not found")

    async def _delete_verified(
        self, tenant: str, caller_id: str, asset_id: str
    ) -> DeleteResult:
        try:
            async with self._session.begin():
                deleted = await self._repository.delete(asset_id, tenant)
        except (MediaStoreError, SQLAlchemyError) as e:
            self._probe.metadata_delete_failed(
                tenant=tenant, asset_id=asset_id, error=str(e)
            )
            raise MetadataDeleteFailedError(
                "Failed to delete image from database"
            ) from e

        if not deleted:
            self._probe.metadata_delete_failed(
                tenant=tenant, asset_id=asset_id, error="no row deleted"
            )
            raise MetadataDeleteFailedError("Failed to delete image from database")

        warning = None
        try:
            await self._blob_store.delete(asset_id)
        except BlobStoreError as e:
            self._probe.blob_delete_failed(
                tenant=tenant, asset_id=asset_id, error=e.reason
            )
            warning = f"Failed to delete from storage: {e.reason}"

        self._probe.delete_completed(
            tenant=tenant,
            caller_id=caller_id,
            asset_id=asset_id,
            blob_deleted=warning is None,
        )
        return DeleteResult(
            asset_id=asset_id,
            metadata_deleted=True,
            blob_deleted=warning is None,
            warning=warning,
        )
