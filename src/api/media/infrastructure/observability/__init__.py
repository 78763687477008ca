"""Domain probes for media infrastructure adapters."""

from media.infrastructure.observability.blob_store_probe import (
    BlobStoreProbe,
    DefaultBlobStoreProbe,
)
from media.infrastructure.observability.repository_probe import (
    DefaultMediaRepositoryProbe,
    MediaRepositoryProbe,
)

__all__ = [
    "BlobStoreProbe",
    "DefaultBlobStoreProbe",
    "DefaultMediaRepositoryProbe",
    "MediaRepositoryProbe",
]
