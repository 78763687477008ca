"""Domain probe for tenant directory reads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantDirectoryProbe(Protocol):
    """Domain probe for tenant directory operations."""

    def key_read(self, key: str, found: bool) -> None:
        """Record a completed directory read."""
        ...

    def key_read_failed(
        self, key: str, reason: str, status_code: int | None = None
    ) -> None:
        """Record a directory read that could not be completed."""
        ...

    def malformed_record(self, key: str, reason: str) -> None:
        """Record a directory record that could not be decoded."""
        ...

    def with_context(self, context: ObservationContext) -> TenantDirectoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantDirectoryProbe:
    """Default implementation of TenantDirectoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantDirectoryProbe:
        return DefaultTenantDirectoryProbe(logger=self._logger, context=context)

    def key_read(self, key: str, found: bool) -> None:
        self._log(
            "debug",
            "tenant_directory_key_read",
            key=key,
            found=found,
        )

    def key_read_failed(
        self, key: str, reason: str, status_code: int | None = None
    ) -> None:
        self._log(
            "error",
            "tenant_directory_key_read_failed",
            key=key,
            reason=reason,
            status_code=status_code,
        )

    def malformed_record(self, key: str, reason: str) -> None:
        self._log(
            "error",
            "tenant_directory_malformed_record",
            key=key,
            reason=reason,
        )
