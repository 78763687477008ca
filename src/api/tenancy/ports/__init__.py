"""Ports for the tenancy bounded context."""

from tenancy.ports.exceptions import (
    CallerNotAuthorizedError,
    TenantDirectoryUnavailableError,
    TenantNotFoundError,
)
from tenancy.ports.repositories import ITenantDirectory, domain_key, tenant_key

__all__ = [
    "CallerNotAuthorizedError",
    "ITenantDirectory",
    "TenantDirectoryUnavailableError",
    "TenantNotFoundError",
    "domain_key",
    "tenant_key",
]
