"""Domain probe for the external blob store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class BlobStoreProbe(Protocol):
    """Domain probe for blob store requests."""

    def blob_uploaded(self, blob_id: str, filename: str) -> None: ...

    def blob_deleted(self, blob_id: str) -> None: ...

    def request_failed(
        self,
        operation: str,
        reason: str,
        status_code: int | None = None,
    ) -> None: ...

    def with_context(self, context: ObservationContext) -> BlobStoreProbe: ...


class DefaultBlobStoreProbe:
    """Default implementation of BlobStoreProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultBlobStoreProbe:
        return DefaultBlobStoreProbe(logger=self._logger, context=context)

    def blob_uploaded(self, blob_id: str, filename: str) -> None:
        self._log(
            "info",
            "blob_store_uploaded",
            blob_id=blob_id,
            filename=filename,
        )

    def blob_deleted(self, blob_id: str) -> None:
        self._log(
            "info",
            "blob_store_deleted",
            blob_id=blob_id,
        )

    def request_failed(
        self,
        operation: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        self._log(
            "error",
            "blob_store_request_failed",
            operation=operation,
            reason=reason,
            status_code=status_code,
        )
