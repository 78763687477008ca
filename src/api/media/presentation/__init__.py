"""Media presentation layer."""

from media.presentation.errors import MEDIA_ERROR_STATUSES
from media.presentation.routes import admin_router, public_router

__all__ = ["MEDIA_ERROR_STATUSES", "admin_router", "public_router"]
