"""Infrastructure adapters for the media bounded context."""

from media.infrastructure.images_blob_store import CloudflareImagesBlobStore
from media.infrastructure.media_repository import MediaRepository

__all__ = ["CloudflareImagesBlobStore", "MediaRepository"]
