"""Unit tests for AuthorizationGate."""

from unittest.mock import AsyncMock, create_autospec

import pytest

from shared_kernel.auth import Identity
from tenancy.application import AuthorizationGate
from tenancy.application.observability import AuthorizationGateProbe
from tenancy.domain import Tenant
from tenancy.ports.exceptions import (
    CallerNotAuthorizedError,
    TenantDirectoryUnavailableError,
    TenantNotFoundError,
)
from tenancy.ports.repositories import ITenantDirectory


@pytest.fixture
def johndoe():
    return Tenant(
        username="johndoe",
        domains=("johndoe.com",),
        authorized_client_ids=frozenset({"abc123.access", "john@example.com"}),
    )


@pytest.fixture
def mock_directory(johndoe):
    directory = create_autospec(ITenantDirectory, instance=True)
    directory.get_username_for_domain = AsyncMock(return_value=None)
    directory.get_tenant = AsyncMock(return_value=johndoe)
    return directory


@pytest.fixture
def mock_probe():
    return create_autospec(AuthorizationGateProbe, instance=True)


@pytest.fixture
def gate(mock_directory, mock_probe):
    return AuthorizationGate(directory=mock_directory, probe=mock_probe)


class TestAuthorize:
    @pytest.mark.asyncio
    async def test_allowlisted_service_token_passes(
        self, gate, mock_directory, mock_probe
    ):
        await gate.authorize(Identity.service_token("abc123.access"), "johndoe")

        mock_directory.get_tenant.assert_awaited_once_with("johndoe")
        mock_probe.caller_authorized.assert_called_once_with(
            caller_id="abc123.access", tenant="johndoe"
        )

    @pytest.mark.asyncio
    async def test_allowlisted_idp_user_passes_by_email(self, gate):
        await gate.authorize(Identity.idp_user("john@example.com"), "johndoe")

    @pytest.mark.asyncio
    async def test_unlisted_caller_is_rejected(self, gate, mock_probe):
        with pytest.raises(CallerNotAuthorizedError) as exc_info:
            await gate.authorize(Identity.service_token("intruder"), "johndoe")

        assert exc_info.value.caller_id == "intruder"
        assert exc_info.value.tenant == "johndoe"
        assert str(exc_info.value) == "Client intruder not authorized for user johndoe"
        mock_probe.caller_not_authorized.assert_called_once_with(
            caller_id="intruder", tenant="johndoe"
        )

    @pytest.mark.asyncio
    async def test_caller_id_match_is_case_sensitive(self, gate):
        with pytest.raises(CallerNotAuthorizedError):
            await gate.authorize(Identity.idp_user("John@Example.com"), "johndoe")

    @pytest.mark.asyncio
    async def test_missing_tenant_record_is_not_found(
        self, gate, mock_directory, mock_probe
    ):
        mock_directory.get_tenant.return_value = None

        with pytest.raises(TenantNotFoundError, match="User not found: ghost"):
            await gate.authorize(Identity.service_token("abc123.access"), "ghost")

        mock_probe.tenant_record_missing.assert_called_once_with(
            caller_id="abc123.access", tenant="ghost"
        )

    @pytest.mark.asyncio
    async def test_empty_allowlist_rejects_everyone(self, gate, mock_directory):
        mock_directory.get_tenant.return_value = Tenant(username="johndoe")

        with pytest.raises(CallerNotAuthorizedError):
            await gate.authorize(Identity.service_token("abc123.access"), "johndoe")

    @pytest.mark.asyncio
    async def test_directory_failure_propagates(self, gate, mock_directory):
        mock_directory.get_tenant.side_effect = TenantDirectoryUnavailableError("down")

        with pytest.raises(TenantDirectoryUnavailableError):
            await gate.authorize(Identity.service_token("abc123.access"), "johndoe")

    @pytest.mark.asyncio
    async def test_repeated_calls_give_same_outcome_and_reads(
        self, gate, mock_directory
    ):
        identity = Identity.service_token("abc123.access")

        await gate.authorize(identity, "johndoe")
        await gate.authorize(identity, "johndoe")

        assert mock_directory.get_tenant.await_count == 2


class TestDevelopmentCallerOverride:
    @pytest.mark.asyncio
    async def test_matching_caller_skips_directory(
        self, gate, mock_directory, mock_probe
    ):
        await gate.authorize(
            Identity.service_token("dev-client-id"),
            "anyone",
            dev_caller_id_override="dev-client-id",
        )

        mock_directory.get_tenant.assert_not_awaited()
        mock_probe.development_caller_bypass.assert_called_once_with(
            caller_id="dev-client-id", tenant="anyone"
        )

    @pytest.mark.asyncio
    async def test_non_matching_caller_uses_allowlist(self, gate, mock_directory):
        with pytest.raises(CallerNotAuthorizedError):
            await gate.authorize(
                Identity.service_token("intruder"),
                "johndoe",
                dev_caller_id_override="dev-client-id",
            )

        mock_directory.get_tenant.assert_awaited_once_with("johndoe")

    @pytest.mark.asyncio
    async def test_empty_override_is_disabled(self, gate, mock_directory):
        mock_directory.get_tenant.return_value = Tenant(username="johndoe")

        with pytest.raises(CallerNotAuthorizedError):
            await gate.authorize(
                Identity.service_token(""), "johndoe", dev_caller_id_override=""
            )
