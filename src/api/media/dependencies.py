"""FastAPI dependencies for the media bounded context."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_read_session, get_write_session
from infrastructure.dependencies import get_observation_context
from infrastructure.settings import get_images_settings
from media.application.observability import (
    DefaultMediaDeleteProbe,
    DefaultMediaQueryProbe,
    DefaultMediaUploadProbe,
)
from media.application.services import (
    MediaDeleteService,
    MediaQueryService,
    MediaUploadService,
)
from media.infrastructure import CloudflareImagesBlobStore, MediaRepository
from media.infrastructure.observability import (
    DefaultBlobStoreProbe,
    DefaultMediaRepositoryProbe,
)
from media.ports.repositories import IBlobStore
from shared_kernel.exceptions import ConfigurationError
from shared_kernel.observability_context import ObservationContext


@lru_cache
def get_blob_store() -> IBlobStore:
    """Get the application-scoped blob store (singleton).

    Raises:
        ConfigurationError: If the Images account id or token is not set.
    """
    settings = get_images_settings()
    token = settings.api_token.get_secret_value()
    missing = [
        name
        for name, value in (
            ("CHRONONAGRAM_IMAGES_ACCOUNT_ID", settings.account_id),
            ("CHRONONAGRAM_IMAGES_API_TOKEN", token),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            "Image storage is not configured; missing " + ", ".join(missing)
        )

    return CloudflareImagesBlobStore(
        account_id=settings.account_id,
        api_token=token,
        api_base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
        probe=DefaultBlobStoreProbe(),
    )


def get_media_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> MediaRepository:
    """Get MediaRepository bound to the request's write session."""
    return MediaRepository(
        session=session,
        probe=DefaultMediaRepositoryProbe().with_context(context),
    )


def get_read_media_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> MediaRepository:
    """Get MediaRepository bound to the request's read session."""
    return MediaRepository(
        session=session,
        probe=DefaultMediaRepositoryProbe().with_context(context),
    )


def get_upload_service(
    repository: Annotated[MediaRepository, Depends(get_media_repository)],
    blob_store: Annotated[IBlobStore, Depends(get_blob_store)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> MediaUploadService:
    """Get MediaUploadService instance.

    Args:
        repository: Media repository (shares session via FastAPI dependency caching)
        blob_store: External blob store
        session: Database session for transaction management
        context: Request observation context
    """
    return MediaUploadService(
        repository=repository,
        blob_store=blob_store,
        session=session,
        probe=DefaultMediaUploadProbe().with_context(context),
    )


def get_delete_service(
    repository: Annotated[MediaRepository, Depends(get_media_repository)],
    blob_store: Annotated[IBlobStore, Depends(get_blob_store)],
    session: Annotated[AsyncSession, Depends(get_write_session)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> MediaDeleteService:
    """Get MediaDeleteService instance."""
    return MediaDeleteService(
        repository=repository,
        blob_store=blob_store,
        session=session,
        probe=DefaultMediaDeleteProbe().with_context(context),
    )


def get_query_service(
    repository: Annotated[MediaRepository, Depends(get_read_media_repository)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> MediaQueryService:
    """Get MediaQueryService instance."""
    return MediaQueryService(
        repository=repository,
        probe=DefaultMediaQueryProbe().with_context(context),
    )
