"""Hostname to tenant resolution.

Each custom domain maps to exactly one tenant through an administrator
maintained directory. Loopback hosts are served with a configured override
tenant instead, so a developer can run the gallery locally without any
directory records.
"""

from __future__ import annotations

import ipaddress

from shared_kernel.exceptions import ConfigurationError
from tenancy.application.observability import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)
from tenancy.ports.exceptions import TenantNotFoundError
from tenancy.ports.repositories import ITenantDirectory


def normalize_hostname(hostname: str) -> str:
    """Strip the port and trailing dot from a Host value and lower-case it.

    Handles bracketed IPv6 literals such as ``[::1]:5173``.
    """
    host = hostname.strip().lower()
    if host.startswith("["):
        end = host.find("]")
        if end != -1:
            return host[1:end]
    elif host.count(":") == 1:
        host = host.split(":", 1)[0]
    return host.rstrip(".")


def is_development_host(host: str) -> bool:
    """Check whether a normalized host is a loopback/development host."""
    if host == "localhost" or host.endswith(".localhost"):
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


class TenantResolver:
    """Resolves a request hostname to a tenant username."""

    def __init__(
        self,
        directory: ITenantDirectory,
        probe: TenantResolverProbe | None = None,
    ):
        self._directory = directory
        self._probe = probe or DefaultTenantResolverProbe()

    async def resolve(
        self,
        hostname: str,
        dev_user_override: str | None = None,
    ) -> str:
        """Resolve ``hostname`` to the owning tenant's username.

        Lookup is an exact match on the bare hostname; subdomains are not
        reduced to a base domain.

        Args:
            hostname: Raw Host header value, optionally with a port.
            dev_user_override: Tenant to serve on loopback hosts.

        Returns:
            The tenant username.

        Raises:
            ConfigurationError: If a loopback host is requested and no
                override is configured.
            TenantNotFoundError: If the hostname has no directory entry.
            TenantDirectoryUnavailableError: If the directory cannot be read.
        """
        host = normalize_hostname(hostname)

        if is_development_host(host):
            if not dev_user_override:
                self._probe.development_override_missing(hostname=host)
                raise ConfigurationError(
                    "Development host requested but no development user is configured"
                )
            self._probe.development_override_used(
                hostname=host, username=dev_user_override
            )
            return dev_user_override

        username = await self._directory.get_username_for_domain(host)
        if not username:
            self._probe.tenant_not_found(hostname=host)
            raise TenantNotFoundError(f"No tenant configured for domain: {host}")

        self._probe.tenant_resolved(hostname=host, username=username)
        return username
