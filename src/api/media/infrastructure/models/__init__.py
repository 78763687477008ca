"""ORM models for the media bounded context."""

from media.infrastructure.models.image import ImageModel

__all__ = ["ImageModel"]
