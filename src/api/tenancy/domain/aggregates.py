"""Tenant aggregate for the tenancy bounded context.

Tenants are administered out-of-band (directory records written at deploy
time). From this service's perspective they are read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Avatar:
    """Reference to a tenant's avatar image in the blob store."""

    id: str
    variant: str


@dataclass(frozen=True)
class Tenant:
    """A gallery owner, identified by a unique username.

    Attributes:
        username: Unique tenant username.
        domains: Custom domains served for this tenant.
        display_name: Name shown on the gallery.
        avatar: Avatar image reference, if configured.
        authorized_client_ids: Caller ids allowed to write on the tenant's
            behalf. The sole source of truth for write authorization.
    """

    username: str
    domains: tuple[str, ...] = ()
    display_name: str | None = None
    avatar: Avatar | None = None
    authorized_client_ids: frozenset[str] = field(default_factory=frozenset)

    def authorizes(self, caller_id: str) -> bool:
        """Check whether ``caller_id`` is on the tenant's allowlist."""
        return caller_id in self.authorized_client_ids
