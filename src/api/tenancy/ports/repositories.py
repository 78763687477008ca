"""Directory protocol (port) for the tenancy bounded context.

The directory is an external key-value store:

    domain:{hostname}  -> tenant username
    user:{username}    -> tenant document (JSON)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenancy.domain.aggregates import Tenant


def domain_key(hostname: str) -> str:
    """Directory key mapping a bare hostname to a username."""
    return f"domain:{hostname}"


def tenant_key(username: str) -> str:
    """Directory key holding a tenant's document."""
    return f"user:{username}"


@runtime_checkable
class ITenantDirectory(Protocol):
    """Read-only access to tenant records."""

    async def get_username_for_domain(self, hostname: str) -> str | None:
        """Look up the tenant that owns ``hostname``.

        Exact match only; no wildcard or base-domain reduction.

        Args:
            hostname: Bare, lower-cased hostname without port.

        Returns:
            The tenant username, or None if the domain is not configured.

        Raises:
            TenantDirectoryUnavailableError: If the directory cannot be read.
        """
        ...

    async def get_tenant(self, username: str) -> Tenant | None:
        """Load a tenant record.

        Args:
            username: Tenant username.

        Returns:
            The Tenant, or None if no record exists.

        Raises:
            TenantDirectoryUnavailableError: If the directory cannot be read.
            ConfigurationError: If the stored record is malformed.
        """
        ...
