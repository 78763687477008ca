"""Shared request-context value objects.

The tenancy bounded context resolves these from request headers; the media
bounded context consumes them.
"""

from shared_kernel.middleware.tenant_context import (
    AuthorizedTenantContext,
    TenantContext,
    TenantSource,
)

__all__ = [
    "AuthorizedTenantContext",
    "TenantContext",
    "TenantSource",
]
