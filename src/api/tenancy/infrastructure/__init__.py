"""Infrastructure adapters for the tenancy bounded context."""

from tenancy.infrastructure.cached_directory import CachedTenantDirectory
from tenancy.infrastructure.kv_directory import CloudflareKVTenantDirectory

__all__ = ["CachedTenantDirectory", "CloudflareKVTenantDirectory"]
