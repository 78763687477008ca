"""Domain probe for the media upload pipeline.

An upload moves through ``validated -> blob_written -> metadata_written``.
Every abnormal exit from a non-terminal state has its own event; the
orphaned blob event is logged at error level so it can be alerted on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

from media.domain.value_objects import UploadState

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class MediaUploadProbe(Protocol):
    """Domain probe for upload pipeline operations."""

    def upload_rejected(self, tenant: str, reason: str, detail: str) -> None:
        """Record that validation rejected an upload before any write."""
        ...

    def blob_write_failed(self, tenant: str, filename: str, error: str) -> None:
        """Record that the blob store write failed. Nothing was persisted."""
        ...

    def orphaned_blob(
        self, tenant: str, blob_id: str, filename: str, error: str
    ) -> None:
        """Record a blob left without a metadata row. Needs manual cleanup."""
        ...

    def upload_completed(
        self, tenant: str, caller_id: str, asset_id: str, filename: str
    ) -> None:
        """Record that both stores hold the new asset."""
        ...

    def with_context(self, context: ObservationContext) -> MediaUploadProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultMediaUploadProbe:
    """Default implementation of MediaUploadProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultMediaUploadProbe:
        """Create a new probe with observation context bound."""
        return DefaultMediaUploadProbe(logger=self._logger, context=context)

    def upload_rejected(self, tenant: str, reason: str, detail: str) -> None:
        """Record that validation rejected an upload before any write."""
        self._log(
            "info",
            "media_upload_rejected",
            tenant=tenant,
            reason=reason,
            detail=detail,
        )

    def blob_write_failed(self, tenant: str, filename: str, error: str) -> None:
        """Record that the blob store write failed. Nothing was persisted."""
        self._log(
            "error",
            "media_blob_write_failed",
            tenant=tenant,
            filename=filename,
            error=error,
            state=UploadState.VALIDATED.value,
        )

    def orphaned_blob(
        self, tenant: str, blob_id: str, filename: str, error: str
    ) -> None:
        """Record a blob left without a metadata row. Needs manual cleanup."""
        self._log(
            "error",
            "media_orphaned_blob",
            tenant=tenant,
            blob_id=blob_id,
            filename=filename,
            error=error,
            state=UploadState.BLOB_WRITTEN.value,
            operation="upload",
        )

    def upload_completed(
        self, tenant: str, caller_id: str, asset_id: str, filename: str
    ) -> None:
        """Record that both stores hold the new asset."""
        self._log(
            "info",
            "media_upload_completed",
            tenant=tenant,
            caller_id=caller_id,
            asset_id=asset_id,
            filename=filename,
            state=UploadState.METADATA_WRITTEN.value,
        )
