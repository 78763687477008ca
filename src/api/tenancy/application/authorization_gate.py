"""Per-tenant write authorization.

The gate is independent of hostname resolution: callers pass the tenant
username they already resolved and the gate never re-derives it.
"""

from __future__ import annotations

from shared_kernel.auth.access_identity import Identity
from tenancy.application.observability import (
    AuthorizationGateProbe,
    DefaultAuthorizationGateProbe,
)
from tenancy.ports.exceptions import CallerNotAuthorizedError, TenantNotFoundError
from tenancy.ports.repositories import ITenantDirectory


class AuthorizationGate:
    """Decides whether an identity may act on behalf of a tenant.

    Holds no state between calls; the same inputs always perform the same
    directory reads and produce the same outcome.
    """

    def __init__(
        self,
        directory: ITenantDirectory,
        probe: AuthorizationGateProbe | None = None,
    ):
        self._directory = directory
        self._probe = probe or DefaultAuthorizationGateProbe()

    async def authorize(
        self,
        identity: Identity,
        tenant_username: str,
        dev_caller_id_override: str | None = None,
    ) -> None:
        """Authorize ``identity`` for ``tenant_username`` or raise.

        Args:
            identity: Identity produced by the access identity extractor.
            tenant_username: Tenant resolved for the request.
            dev_caller_id_override: Caller id that is authorized for every
                tenant without a directory read. Development only.

        Raises:
            TenantNotFoundError: If the tenant has no directory record.
            CallerNotAuthorizedError: If the caller id is not allowlisted.
            TenantDirectoryUnavailableError: If the directory cannot be read.
        """
        caller_id = identity.caller_id

        if dev_caller_id_override and caller_id == dev_caller_id_override:
            self._probe.development_caller_bypass(
                caller_id=caller_id, tenant=tenant_username
            )
            return

        tenant = await self._directory.get_tenant(tenant_username)
        if tenant is None:
            self._probe.tenant_record_missing(
                caller_id=caller_id, tenant=tenant_username
            )
            raise TenantNotFoundError(f"User not found: {tenant_username}")

        if not tenant.authorizes(caller_id):
            self._probe.caller_not_authorized(
                caller_id=caller_id, tenant=tenant_username
            )
            raise CallerNotAuthorizedError(caller_id=caller_id, tenant=tenant_username)

        self._probe.caller_authorized(caller_id=caller_id, tenant=tenant_username)
