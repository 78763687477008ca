"""Read-through caching decorator for the tenant directory."""

from __future__ import annotations

from shared_kernel.caching import ReadThroughCache
from tenancy.domain.aggregates import Tenant
from tenancy.ports.repositories import ITenantDirectory, domain_key, tenant_key


class CachedTenantDirectory:
    """Wraps an ITenantDirectory with process-wide TTL caches.

    Misses are not cached, so a newly configured domain or tenant is visible
    on the next request. Errors from the wrapped directory propagate.
    """

    def __init__(self, inner: ITenantDirectory, ttl_seconds: float):
        self._inner = inner
        self._usernames: ReadThroughCache[str] = ReadThroughCache(ttl_seconds)
        self._tenants: ReadThroughCache[Tenant] = ReadThroughCache(ttl_seconds)

    async def get_username_for_domain(self, hostname: str) -> str | None:
        return await self._usernames.get(
            domain_key(hostname),
            lambda: self._inner.get_username_for_domain(hostname),
        )

    async def get_tenant(self, username: str) -> Tenant | None:
        return await self._tenants.get(
            tenant_key(username),
            lambda: self._inner.get_tenant(username),
        )

    def clear(self) -> None:
        """Drop every cached entry."""
        self._usernames.clear()
        self._tenants.clear()
