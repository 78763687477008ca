"""Application layer for the tenancy bounded context."""

from tenancy.application.authorization_gate import AuthorizationGate
from tenancy.application.tenant_resolver import TenantResolver

__all__ = ["AuthorizationGate", "TenantResolver"]
