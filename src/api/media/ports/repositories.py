"""Repository and store protocols (ports) for the media bounded context.

The metadata repository and the blob store are independent systems with no
shared transaction coordinator.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from media.domain.aggregates import MediaAsset


@runtime_checkable
class IMediaRepository(Protocol):
    """Metadata rows in the relational media store.

    Implementations raise MediaStoreError when a statement fails.
    """

    async def get_owned(self, asset_id: str, username: str) -> MediaAsset | None:
        """Point lookup scoped to a tenant."""
        ...

    async def get_by_id(self, asset_id: str) -> MediaAsset | None:
        """Point lookup across every tenant. Used only for ownership tie-breaks."""
        ...

    async def add(self, asset: MediaAsset) -> None:
        """Insert a new row."""
        ...

    async def delete(self, asset_id: str, username: str) -> bool:
        """Delete a tenant's row.

        Returns:
            True if a row was deleted.
        """
        ...

    async def find_by_name(self, username: str, name: str) -> MediaAsset | None:
        """Case-insensitive name match within a tenant, newest upload first."""
        ...

    async def list_by_username(
        self, username: str, offset: int, limit: int
    ) -> list[MediaAsset]:
        """Tenant's assets ordered by captured time, newest first."""
        ...


@runtime_checkable
class IBlobStore(Protocol):
    """External store holding the image binaries."""

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str | None,
        metadata: Mapping[str, Any],
    ) -> tuple[str, str]:
        """Upload a file.

        Returns:
            Tuple of (blob id, filename as stored).

        Raises:
            BlobStoreUnavailableError: The store could not be reached.
            BlobStoreRejectedError: The store answered with a failure.
        """
        ...

    async def delete(self, blob_id: str) -> None:
        """Delete a blob.

        Raises:
            BlobStoreUnavailableError: The store could not be reached.
            BlobStoreRejectedError: The store answered with a failure.
        """
        ...
