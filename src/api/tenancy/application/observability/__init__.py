"""Domain probes for the tenancy application layer."""

from tenancy.application.observability.authorization_probe import (
    AuthorizationGateProbe,
    DefaultAuthorizationGateProbe,
)
from tenancy.application.observability.tenant_resolver_probe import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)

__all__ = [
    "AuthorizationGateProbe",
    "DefaultAuthorizationGateProbe",
    "DefaultTenantResolverProbe",
    "TenantResolverProbe",
]
