"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so a single upload or delete can be followed
    across the tenancy and media probes.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        tenant: Username of the tenant the request acts on (if resolved).
        caller_id: Identifier of the authenticated caller (if extracted).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", tenant="johndoe")
        probe = DefaultMediaUploadProbe().with_context(context)
    """

    request_id: str | None = None
    tenant: str | None = None
    caller_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.tenant is not None:
            result["tenant"] = self.tenant
        if self.caller_id is not None:
            result["caller_id"] = self.caller_id
        result.update(self.extra)
        return result

    def with_tenant(self, tenant: str) -> ObservationContext:
        """Create a new context with the tenant set."""
        return replace(self, tenant=tenant)

    def with_caller(self, caller_id: str) -> ObservationContext:
        """Create a new context with the caller id set."""
        return replace(self, caller_id=caller_id)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
