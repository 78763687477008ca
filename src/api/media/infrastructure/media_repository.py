"""PostgreSQL implementation of IMediaRepository.

Transaction boundaries belong to the application services; this repository
only issues statements on the session it is given. Every SQLAlchemy failure
is re-raised as MediaStoreError so services never see driver exceptions.
"""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from media.domain.aggregates import MediaAsset
from media.infrastructure.models import ImageModel
from media.infrastructure.observability import (
    DefaultMediaRepositoryProbe,
    MediaRepositoryProbe,
)
from media.ports.exceptions import MediaStoreError
from media.ports.repositories import IMediaRepository


class MediaRepository(IMediaRepository):
    """Repository managing the images table."""

    def __init__(
        self,
        session: AsyncSession,
        probe: MediaRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with a database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultMediaRepositoryProbe()

    def _store_error(self, operation: str, error: SQLAlchemyError) -> MediaStoreError:
        self._probe.statement_failed(operation=operation, error=str(error))
        return MediaStoreError(f"Media store {operation} failed")

    async def _first(self, stmt, operation: str) -> MediaAsset | None:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise self._store_error(operation, e) from e
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    async def get_owned(self, asset_id: str, username: str) -> MediaAsset | None:
        stmt = select(ImageModel).where(
            ImageModel.id == asset_id,
            ImageModel.username == username,
        )
        return await self._first(stmt, "get_owned")

    async def get_by_id(self, asset_id: str) -> MediaAsset | None:
        stmt = select(ImageModel).where(ImageModel.id == asset_id)
        return await self._first(stmt, "get_by_id")

    async def find_by_name(self, username: str, name: str) -> MediaAsset | None:
        stmt = (
            select(ImageModel)
            .where(
                ImageModel.username == username,
                func.lower(ImageModel.name) == name.lower(),
            )
            .order_by(ImageModel.uploaded.desc())
            .limit(1)
        )
        return await self._first(stmt, "find_by_name")

    async def list_by_username(
        self, username: str, offset: int, limit: int
    ) -> list[MediaAsset]:
        stmt = (
            select(ImageModel)
            .where(ImageModel.username == username)
            .order_by(ImageModel.captured.desc(), ImageModel.id)
            .offset(offset)
            .limit(limit)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise self._store_error("list_by_username", e) from e
        return [self._to_domain(model) for model in result.scalars().all()]

    async def add(self, asset: MediaAsset) -> None:
        """Insert a metadata row.

        Flushes immediately so constraint violations surface here rather than
        at commit.

        Raises:
            MediaStoreError: If the insert fails.
        """
        model = ImageModel(
            id=asset.id,
            username=asset.username,
            name=asset.name,
            caption=asset.caption,
            captured=asset.captured,
            uploaded=asset.uploaded,
        )
        try:
            self._session.add(model)
            await self._session.flush()
        except SQLAlchemyError as e:
            raise self._store_error("insert", e) from e
        self._probe.asset_saved(asset_id=asset.id, username=asset.username)

    async def delete(self, asset_id: str, username: str) -> bool:
        stmt = delete(ImageModel).where(
            ImageModel.id == asset_id,
            ImageModel.username == username,
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise self._store_error("delete", e) from e

        deleted = result.rowcount > 0
        self._probe.asset_deleted(asset_id=asset_id, username=username, deleted=deleted)
        return deleted

    @staticmethod
    def _to_domain(model: ImageModel) -> MediaAsset:
        return MediaAsset(
            id=model.id,
            username=model.username,
            name=model.name,
            caption=model.caption,
            captured=model.captured,
            uploaded=model.uploaded,
        )
