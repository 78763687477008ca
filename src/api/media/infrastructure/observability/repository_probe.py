"""Domain probe for media repository operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MediaRepositoryProbe(Protocol):
    """Domain probe for media metadata persistence."""

    def asset_saved(self, asset_id: str, username: str) -> None:
        """Record that a metadata row was inserted."""
        ...

    def asset_deleted(self, asset_id: str, username: str, deleted: bool) -> None:
        """Record the outcome of a delete statement."""
        ...

    def statement_failed(self, operation: str, error: str) -> None:
        """Record that the store rejected a statement."""
        ...

    def with_context(self, context: ObservationContext) -> MediaRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMediaRepositoryProbe:
    """Default implementation of MediaRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def _log(self, level: str, event: str, **fields: Any) -> None:
        # Explicit event fields win over the bound context.
        log = getattr(self._logger, level)
        log(event, **{**self._get_context_kwargs(), **fields})

    def with_context(self, context: ObservationContext) -> DefaultMediaRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultMediaRepositoryProbe(logger=self._logger, context=context)

    def asset_saved(self, asset_id: str, username: str) -> None:
        """Record that a metadata row was inserted."""
        self._log(
            "info",
            "media_asset_saved",
            asset_id=asset_id,
            username=username,
        )

    def asset_deleted(self, asset_id: str, username: str, deleted: bool) -> None:
        """Record the outcome of a delete statement."""
        self._log(
            "info",
            "media_asset_deleted",
            asset_id=asset_id,
            username=username,
            deleted=deleted,
        )

    def statement_failed(self, operation: str, error: str) -> None:
        """Record that the store rejected a statement."""
        self._log(
            "error",
            "media_store_statement_failed",
            operation=operation,
            error=error,
        )
