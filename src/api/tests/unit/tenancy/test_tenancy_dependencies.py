"""Unit tests for tenancy FastAPI dependencies."""

from unittest.mock import AsyncMock, Mock

import pytest
from starlette.datastructures import Headers

from infrastructure.settings import AccessSettings, TenancySettings, get_tenancy_settings
from shared_kernel.auth import AccessIdentityExtractor, Identity
from shared_kernel.middleware.tenant_context import TenantContext, TenantSource
from tenancy.application import AuthorizationGate, TenantResolver
from tenancy.dependencies import (
    get_authorized_tenant_context,
    get_identity,
    get_tenant_directory,
    resolve_tenant,
)
from tenancy.infrastructure import CachedTenantDirectory
from tenancy.infrastructure.kv_directory import UnconfiguredTenantDirectory
from tenancy.ports.exceptions import CallerNotAuthorizedError


def make_request(headers: dict[str, str]) -> Mock:
    request = Mock()
    request.headers = Headers(headers)
    request.url.hostname = None
    return request


@pytest.fixture
def clear_directory_cache():
    get_tenancy_settings.cache_clear()
    get_tenant_directory.cache_clear()
    yield
    get_tenancy_settings.cache_clear()
    get_tenant_directory.cache_clear()


class TestGetTenantDirectory:
    def test_unconfigured_without_credentials(self, monkeypatch, clear_directory_cache):
        monkeypatch.delenv("CHRONONAGRAM_TENANCY_ACCOUNT_ID", raising=False)
        monkeypatch.delenv("CHRONONAGRAM_TENANCY_NAMESPACE_ID", raising=False)
        monkeypatch.delenv("CHRONONAGRAM_TENANCY_API_TOKEN", raising=False)

        assert isinstance(get_tenant_directory(), UnconfiguredTenantDirectory)

    def test_cached_kv_directory_with_credentials(
        self, monkeypatch, clear_directory_cache
    ):
        monkeypatch.setenv("CHRONONAGRAM_TENANCY_ACCOUNT_ID", "acct")
        monkeypatch.setenv("CHRONONAGRAM_TENANCY_NAMESPACE_ID", "ns")
        monkeypatch.setenv("CHRONONAGRAM_TENANCY_API_TOKEN", "token")

        directory = get_tenant_directory()

        assert isinstance(directory, CachedTenantDirectory)
        assert get_tenant_directory() is directory


class TestResolveTenant:
    @pytest.mark.asyncio
    async def test_directory_host(self):
        resolver = Mock(spec=TenantResolver)
        resolver.resolve = AsyncMock(return_value="johndoe")

        tenant = await resolve_tenant(
            make_request({"host": "johndoe.com"}),
            resolver,
            TenancySettings(dev_user="devuser"),
        )

        assert tenant == TenantContext(
            username="johndoe", source=TenantSource.DIRECTORY
        )
        resolver.resolve.assert_awaited_once_with(
            "johndoe.com", dev_user_override="devuser"
        )

    @pytest.mark.asyncio
    async def test_development_host(self):
        resolver = Mock(spec=TenantResolver)
        resolver.resolve = AsyncMock(return_value="devuser")

        tenant = await resolve_tenant(
            make_request({"host": "localhost:5173"}),
            resolver,
            TenancySettings(dev_user="devuser"),
        )

        assert tenant.source == TenantSource.DEVELOPMENT_OVERRIDE


class TestGetIdentity:
    def test_passes_headers_and_issuer(self):
        extractor = Mock(spec=AccessIdentityExtractor)
        extractor.extract.return_value = Identity.service_token("abc123.access")
        request = make_request({"Cf-Access-Client-Id": "abc123.access"})

        identity = get_identity(
            request, extractor, AccessSettings(issuer="https://team.example")
        )

        assert identity.caller_id == "abc123.access"
        extractor.extract.assert_called_once_with(
            request.headers, expected_issuer="https://team.example"
        )


class TestGetAuthorizedTenantContext:
    @pytest.mark.asyncio
    async def test_returns_context_after_gate_passes(self):
        gate = Mock(spec=AuthorizationGate)
        gate.authorize = AsyncMock(return_value=None)
        tenant = TenantContext(username="johndoe", source=TenantSource.DIRECTORY)
        identity = Identity.service_token("abc123.access")

        context = await get_authorized_tenant_context(
            tenant, identity, gate, AccessSettings(dev_client_id="dev-client-id")
        )

        assert context.username == "johndoe"
        assert context.identity is identity
        gate.authorize.assert_awaited_once_with(
            identity, "johndoe", dev_caller_id_override="dev-client-id"
        )

    @pytest.mark.asyncio
    async def test_gate_rejection_propagates(self):
        gate = Mock(spec=AuthorizationGate)
        gate.authorize = AsyncMock(
            side_effect=CallerNotAuthorizedError(caller_id="x", tenant="johndoe")
        )

        with pytest.raises(CallerNotAuthorizedError):
            await get_authorized_tenant_context(
                TenantContext(username="johndoe", source=TenantSource.DIRECTORY),
                Identity.service_token("x"),
                gate,
                AccessSettings(),
            )
