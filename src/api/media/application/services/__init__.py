"""Application services for the media bounded context."""

from media.application.services.delete_service import MediaDeleteService
from media.application.services.query_service import PAGE_SIZE, MediaQueryService
from media.application.services.upload_service import MediaUploadService

__all__ = [
    "MediaDeleteService",
    "MediaQueryService",
    "MediaUploadService",
    "PAGE_SIZE",
]
