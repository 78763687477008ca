"""Domain probe for hostname to tenant resolution.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantResolverProbe(Protocol):
    """Domain probe for tenant resolution operations."""

    def tenant_resolved(self, hostname: str, username: str) -> None:
        """Record that a hostname resolved through the directory."""
        ...

    def development_override_used(self, hostname: str, username: str) -> None:
        """Record that a loopback host was served with the override tenant."""
        ...

    def development_override_missing(self, hostname: str) -> None:
        """Record that a loopback host was requested without an override."""
        ...

    def tenant_not_found(self, hostname: str) -> None:
        """Record that a hostname has no directory entry."""
        ...

    def with_context(self, context: ObservationContext) -> TenantResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantResolverProbe:
    """Default implementation of TenantResolverProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantResolverProbe(logger=self._logger, context=context)

    def tenant_resolved(self, hostname: str, username: str) -> None:
        """Record that a hostname resolved through the directory."""
        self._log(
            "debug",
            "tenant_resolved",
            hostname=hostname,
            username=username,
        )

    def development_override_used(self, hostname: str, username: str) -> None:
        """Record that a loopback host was served with the override tenant."""
        self._log(
            "debug",
            "tenant_development_override_used",
            hostname=hostname,
            username=username,
        )

    def development_override_missing(self, hostname: str) -> None:
        """Record that a loopback host was requested without an override."""
        self._log(
            "error",
            "tenant_development_override_missing",
            hostname=hostname,
            message="Set CHRONONAGRAM_TENANCY_DEV_USER to serve loopback hosts",
        )

    def tenant_not_found(self, hostname: str) -> None:
        """Record that a hostname has no directory entry."""
        self._log(
            "warning",
            "tenant_not_found",
            hostname=hostname,
        )
