"""Domain probe for the media delete pipeline.

A delete moves through ``verified -> metadata_deleted -> blob_deleted``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

from media.domain.value_objects import DeleteState

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MediaDeleteProbe(Protocol):
    """Domain probe for delete pipeline operations."""

    def delete_rejected(self, tenant: str, reason: str) -> None:
        """Record that the request was rejected before any lookup."""
        ...

    def asset_not_found(self, tenant: str, asset_id: str) -> None:
        """Record that no asset exists with the requested id."""
        ...

    def foreign_asset_delete_attempt(
        self, tenant: str, caller_id: str, asset_id: str, owner: str
    ) -> None:
        """Record an attempt to delete another tenant's asset."""
        ...

    def metadata_delete_failed(self, tenant: str, asset_id: str, error: str) -> None:
        """Record that the metadata row could not be deleted."""
        ...

    def blob_delete_failed(self, tenant: str, asset_id: str, error: str) -> None:
        """Record a blob left behind after its metadata row was deleted."""
        ...

    def delete_completed(
        self, tenant: str, caller_id: str, asset_id: str, blob_deleted: bool
    ) -> None:
        """Record that the metadata row is gone."""
        ...

    def with_context(self, context: ObservationContext) -> MediaDeleteProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMediaDeleteProbe:
    """Default implementation of MediaDeleteProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultMediaDeleteProbe:
        """Create a new probe with observation context bound."""
        return DefaultMediaDeleteProbe(logger=self._logger, context=context)

    def delete_rejected(self, tenant: str, reason: str) -> None:
        """Record that the request was rejected before any lookup."""
        self._log(
            "info",
            "media_delete_rejected",
            tenant=tenant,
            reason=reason,
        )

    def asset_not_found(self, tenant: str, asset_id: str) -> None:
        """Record that no asset exists with the requested id."""
        self._log(
            "info",
            "media_delete_asset_not_found",
            tenant=tenant,
            asset_id=asset_id,
        )

    def foreign_asset_delete_attempt(
        self, tenant: str, caller_id: str, asset_id: str, owner: str
    ) -> None:
        """Record an attempt to delete another tenant's asset."""
        self._log(
            "warning",
            "media_delete_forbidden",
            tenant=tenant,
            caller_id=caller_id,
            asset_id=asset_id,
            owner=owner,
        )

    def metadata_delete_failed(self, tenant: str, asset_id: str, error: str) -> None:
        """Record that the metadata row could not be deleted."""
        self._log(
            "error",
            "media_metadata_delete_failed",
            tenant=tenant,
            asset_id=asset_id,
            error=error,
            state=DeleteState.VERIFIED.value,
        )

    def blob_delete_failed(self, tenant: str, asset_id: str, error: str) -> None:
        """Record a blob left behind after its metadata row was deleted."""
        self._log(
            "error",
            "media_blob_delete_failed",
            tenant=tenant,
            asset_id=asset_id,
            error=error,
            state=DeleteState.METADATA_DELETED.value,
            operation="delete",
        )

    def delete_completed(
        self, tenant: str, caller_id: str, asset_id: str, blob_deleted: bool
    ) -> None:
        """Record that the metadata row is gone."""
        self._log(
            "info",
            "media_delete_completed",
            tenant=tenant,
            caller_id=caller_id,
            asset_id=asset_id,
            blob_deleted=blob_deleted,
            state=(
                DeleteState.BLOB_DELETED.value
                if blob_deleted
                else DeleteState.METADATA_DELETED.value
            ),
        )
