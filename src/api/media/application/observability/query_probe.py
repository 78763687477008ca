"""Domain probe for media read operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MediaQueryProbe(Protocol):
    """Domain probe for media queries."""

    def asset_found_by_name(self, tenant: str, name: str, asset_id: str) -> None: ...

    def asset_name_not_found(self, tenant: str, name: str) -> None: ...

    def assets_listed(
        self, tenant: str, offset: int, count: int, has_more: bool
    ) -> None: ...

    def with_context(self, context: ObservationContext) -> MediaQueryProbe: ...


class DefaultMediaQueryProbe:
    """Default implementation of MediaQueryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def _log(self, level: str, event: str, **fields: Any) -> None:
        # Explicit event fields win over the bound context.
        log = getattr(self._logger, level)
        log(event, **{**self._get_context_kwargs(), **fields})

    def with_context(self, context: ObservationContext) -> DefaultMediaQueryProbe:
        return DefaultMediaQueryProbe(logger=self._logger, context=context)

    def asset_found_by_name(self, tenant: str, name: str, asset_id: str) -> None:
        self._log(
            "debug",
            "media_asset_found_by_name",
            tenant=tenant,
            name=name,
            asset_id=asset_id,
        )

    def asset_name_not_found(self, tenant: str, name: str) -> None:
        self._log(
            "info",
            "media_asset_name_not_found",
            tenant=tenant,
            name=name,
        )

    def assets_listed(
        self, tenant: str, offset: int, count: int, has_more: bool
    ) -> None:
        self._log(
            "debug",
            "media_assets_listed",
            tenant=tenant,
            offset=offset,
            count=count,
            has_more=has_more,
        )
