"""Domain probe for caller identity extraction.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to reading gateway trust headers.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccessIdentityProbe(Protocol):
    """Domain probe for identity extraction operations."""

    def identity_extracted(self, kind: str, caller_id: str) -> None:
        """Record that a caller identity was established."""
        ...

    def identity_rejected(self, reason: str, detail: str) -> None:
        """Record that identity extraction failed."""
        ...

    def development_bypass_used(self, caller_id: str) -> None:
        """Record that the development identity bypass was taken."""
        ...

    def with_context(self, context: ObservationContext) -> AccessIdentityProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessIdentityProbe:
    """Default implementation of AccessIdentityProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAccessIdentityProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessIdentityProbe(logger=self._logger, context=context)

    def identity_extracted(self, kind: str, caller_id: str) -> None:
        """Record that a caller identity was established."""
        self._log(
            "info",
            "access_identity_extracted",
            kind=str(kind),
            caller_id=caller_id,
        )

    def identity_rejected(self, reason: str, detail: str) -> None:
        """Record that identity extraction failed."""
        self._log(
            "warning",
            "access_identity_rejected",
            reason=reason,
            detail=detail,
        )

    def development_bypass_used(self, caller_id: str) -> None:
        """Record that the development identity bypass was taken."""
        self._log(
            "warning",
            "access_identity_development_bypass",
            caller_id=caller_id,
        )
