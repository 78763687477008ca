"""Domain probe for tenant write authorization.

Denials are logged with both the caller id and the tenant so they can be
audited.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthorizationGateProbe(Protocol):
    """Domain probe for authorization gate decisions."""

    def caller_authorized(self, caller_id: str, tenant: str) -> None:
        """Record that a caller was found on the tenant's allowlist."""
        ...

    def development_caller_bypass(self, caller_id: str, tenant: str) -> None:
        """Record that the development caller id skipped the allowlist."""
        ...

    def caller_not_authorized(self, caller_id: str, tenant: str) -> None:
        """Record that a caller is not on the tenant's allowlist."""
        ...

    def tenant_record_missing(self, caller_id: str, tenant: str) -> None:
        """Record that the tenant to authorize against does not exist."""
        ...

    def with_context(self, context: ObservationContext) -> AuthorizationGateProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthorizationGateProbe:
    """Default implementation of AuthorizationGateProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthorizationGateProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthorizationGateProbe(logger=self._logger, context=context)

    def caller_authorized(self, caller_id: str, tenant: str) -> None:
        """Record that a caller was found on the tenant's allowlist."""
        self._log(
            "info",
            "authorization_granted",
            caller_id=caller_id,
            tenant=tenant,
        )

    def development_caller_bypass(self, caller_id: str, tenant: str) -> None:
        """Record that the development caller id skipped the allowlist."""
        self._log(
            "warning",
            "authorization_development_bypass",
            caller_id=caller_id,
            tenant=tenant,
        )

    def caller_not_authorized(self, caller_id: str, tenant: str) -> None:
        """Record that a caller is not on the tenant's allowlist."""
        self._log(
            "warning",
            "authorization_denied",
            caller_id=caller_id,
            tenant=tenant,
        )

    def tenant_record_missing(self, caller_id: str, tenant: str) -> None:
        """Record that the tenant to authorize against does not exist."""
        self._log(
            "warning",
            "authorization_tenant_missing",
            caller_id=caller_id,
            tenant=tenant,
        )
