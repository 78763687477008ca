"""FastAPI dependencies for the tenancy bounded context.

Wires the request pipeline that every write route depends on:

    Host header -> TenantResolver -> AccessIdentityExtractor -> AuthorizationGate

and yields an AuthorizedTenantContext for the media routes.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from infrastructure.dependencies import get_observation_context
from infrastructure.settings import (
    AccessSettings,
    TenancySettings,
    get_access_settings,
    get_tenancy_settings,
)
from shared_kernel.auth import (
    AccessIdentityExtractor,
    DefaultAccessIdentityProbe,
    Identity,
)
from shared_kernel.middleware.tenant_context import (
    AuthorizedTenantContext,
    TenantContext,
    TenantSource,
)
from shared_kernel.observability_context import ObservationContext
from tenancy.application import AuthorizationGate, TenantResolver
from tenancy.application.observability import (
    DefaultAuthorizationGateProbe,
    DefaultTenantResolverProbe,
)
from tenancy.application.tenant_resolver import is_development_host, normalize_hostname
from tenancy.infrastructure import CachedTenantDirectory, CloudflareKVTenantDirectory
from tenancy.infrastructure.kv_directory import UnconfiguredTenantDirectory
from tenancy.ports.repositories import ITenantDirectory


@lru_cache
def get_tenant_directory() -> ITenantDirectory:
    """Get the application-scoped tenant directory (singleton).

    The read-through cache lives inside the returned object, so it is shared
    by every request in the process.

    Returns:
        Cached KV directory, or an UnconfiguredTenantDirectory when the KV
        credentials are not set.
    """
    settings = get_tenancy_settings()
    required = {
        "CHRONONAGRAM_TENANCY_ACCOUNT_ID": settings.account_id,
        "CHRONONAGRAM_TENANCY_NAMESPACE_ID": settings.namespace_id,
        "CHRONONAGRAM_TENANCY_API_TOKEN": settings.api_token.get_secret_value(),
    }
    missing = [name for name, value in required.items() if not value]
    if missing:
        return UnconfiguredTenantDirectory(missing)

    directory = CloudflareKVTenantDirectory(
        account_id=settings.account_id,
        namespace_id=settings.namespace_id,
        api_token=settings.api_token.get_secret_value(),
        api_base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
    )
    return CachedTenantDirectory(directory, ttl_seconds=settings.cache_ttl_seconds)


def get_tenant_resolver(
    directory: Annotated[ITenantDirectory, Depends(get_tenant_directory)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> TenantResolver:
    """Get TenantResolver instance bound to the request context."""
    return TenantResolver(
        directory=directory,
        probe=DefaultTenantResolverProbe().with_context(context),
    )


def get_authorization_gate(
    directory: Annotated[ITenantDirectory, Depends(get_tenant_directory)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AuthorizationGate:
    """Get AuthorizationGate instance bound to the request context."""
    return AuthorizationGate(
        directory=directory,
        probe=DefaultAuthorizationGateProbe().with_context(context),
    )


def get_identity_extractor(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AccessIdentityExtractor:
    """Get AccessIdentityExtractor instance bound to the request context."""
    return AccessIdentityExtractor(
        probe=DefaultAccessIdentityProbe().with_context(context),
    )


async def resolve_tenant(
    request: Request,
    resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
) -> TenantContext:
    """Resolve the tenant that owns the request's Host.

    Raises:
        ConfigurationError: Loopback host without a development user.
        TenantNotFoundError: Host has no directory entry.
    """
    hostname = request.headers.get("host") or request.url.hostname or ""
    username = await resolver.resolve(hostname, dev_user_override=settings.dev_user)
    source = (
        TenantSource.DEVELOPMENT_OVERRIDE
        if is_development_host(normalize_hostname(hostname))
        else TenantSource.DIRECTORY
    )
    return TenantContext(username=username, source=source)


def get_identity(
    request: Request,
    extractor: Annotated[AccessIdentityExtractor, Depends(get_identity_extractor)],
    settings: Annotated[AccessSettings, Depends(get_access_settings)],
) -> Identity:
    """Extract the caller identity from the gateway headers.

    Raises:
        AuthenticationError: Missing or invalid trust evidence.
    """
    return extractor.extract(request.headers, expected_issuer=settings.issuer)


async def get_authorized_tenant_context(
    tenant: Annotated[TenantContext, Depends(resolve_tenant)],
    identity: Annotated[Identity, Depends(get_identity)],
    gate: Annotated[AuthorizationGate, Depends(get_authorization_gate)],
    settings: Annotated[AccessSettings, Depends(get_access_settings)],
) -> AuthorizedTenantContext:
    """Authorize the caller for the resolved tenant.

    Raises:
        TenantNotFoundError: Tenant record missing from the directory.
        CallerNotAuthorizedError: Caller not on the tenant's allowlist.
    """
    await gate.authorize(
        identity,
        tenant.username,
        dev_caller_id_override=settings.dev_client_id,
    )
    return AuthorizedTenantContext(tenant=tenant, identity=identity)
