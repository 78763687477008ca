"""Tenant context value objects for the current request.

These are pure value objects shared across bounded contexts. The resolution
logic (hostname lookup, identity extraction, allowlist checks) lives in the
tenancy bounded context's dependency layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from shared_kernel.auth.access_identity import Identity


class TenantSource(StrEnum):
    """How the tenant for a request was determined."""

    DIRECTORY = "directory"
    DEVELOPMENT_OVERRIDE = "development_override"


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant for the current request.

    Attributes:
        username: The tenant's unique username.
        source: Whether the tenant came from the domain directory or from
            the development override on a loopback host.
    """

    username: str
    source: TenantSource


@dataclass(frozen=True)
class AuthorizedTenantContext:
    """A tenant paired with a caller that is allowed to act for it.

    Only produced after the authorization gate has passed; the media
    pipelines accept nothing less and never re-derive either half.
    """

    tenant: TenantContext
    identity: Identity

    @property
    def username(self) -> str:
        """The tenant username the caller acts on."""
        return self.tenant.username
