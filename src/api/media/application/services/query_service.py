"""Read-side queries over a tenant's media assets."""

from __future__ import annotations

from media.application.observability import DefaultMediaQueryProbe, MediaQueryProbe
from media.domain.aggregates import AssetPage, MediaAsset
from media.ports.exceptions import AssetNotFoundError, InvalidAssetNameError
from media.ports.repositories import IMediaRepository

PAGE_SIZE = 15


class MediaQueryService:
    """Lookup by name and paginated listing."""

    def __init__(
        self,
        repository: IMediaRepository,
        probe: MediaQueryProbe | None = None,
    ):
        self._repository = repository
        self._probe = probe or DefaultMediaQueryProbe()

    async def find_by_name(self, tenant: str, name: str) -> MediaAsset:
        """Find the tenant's most recently uploaded asset with ``name``.

        Matching is case-insensitive after trimming whitespace.

        Raises:
            InvalidAssetNameError: If the trimmed name is empty.
            AssetNotFoundError: If no asset matches.
        """
        normalized = (name or "").strip()
        if not normalized:
            raise InvalidAssetNameError("Invalid photo name")

        asset = await self._repository.find_by_name(tenant, normalized)
        if asset is None:
            self._probe.asset_name_not_found(tenant=tenant, name=normalized)
            raise AssetNotFoundError("Image not found")

        self._probe.asset_found_by_name(tenant=tenant, name=normalized, asset_id=asset.id)
        return asset

    async def list_assets(self, tenant: str, offset: int = 0) -> AssetPage:
        """Return one page of the tenant's assets, newest capture first.

        Reads one row past the page to learn whether another page exists.
        Negative offsets are treated as zero.
        """
        offset = max(offset, 0)
        rows = await self._repository.list_by_username(
            tenant, offset=offset, limit=PAGE_SIZE + 1
        )
        items = tuple(rows[:PAGE_SIZE])
        has_more = len(rows) > PAGE_SIZE

        self._probe.assets_listed(
            tenant=tenant, offset=offset, count=len(items), has_more=has_more
        )
        return AssetPage(items=items, offset=offset, has_more=has_more)
