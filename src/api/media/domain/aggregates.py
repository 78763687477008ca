"""MediaAsset aggregate and the results of media operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class MediaAsset:
    """One uploaded photo.

    The metadata row is authoritative for ownership. Assets are created by
    upload and destroyed by delete; they are never updated in place.

    Attributes:
        id: Opaque id assigned by the blob store.
        username: Owning tenant.
        name: Display name.
        caption: Optional caption.
        captured: When the photo was taken (caller supplied).
        uploaded: When the upload was accepted (server assigned).
    """

    id: str
    username: str
    name: str
    captured: datetime
    uploaded: datetime
    caption: str | None = None

    def is_owned_by(self, username: str) -> bool:
        return self.username == username


@dataclass(frozen=True)
class UploadResult:
    asset_id: str
    filename: str
    uploaded: datetime


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a delete.

    ``warning`` is set when the metadata row is gone but the blob could not
    be removed; the delete still counts as successful.
    """

    asset_id: str
    metadata_deleted: bool
    blob_deleted: bool
    warning: str | None = None


@dataclass(frozen=True)
class AssetPage:
    items: tuple[MediaAsset, ...]
    offset: int
    has_more: bool
