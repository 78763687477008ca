"""Unit tests for tenant context value objects."""

import dataclasses

import pytest

from shared_kernel.auth import Identity
from shared_kernel.middleware import (
    AuthorizedTenantContext,
    TenantContext,
    TenantSource,
)


def test_authorized_context_exposes_tenant_username():
    context = AuthorizedTenantContext(
        tenant=TenantContext(username="johndoe", source=TenantSource.DIRECTORY),
        identity=Identity.service_token("abc123.access"),
    )

    assert context.username == "johndoe"
    assert context.identity.caller_id == "abc123.access"


def test_tenant_context_is_immutable():
    context = TenantContext(username="johndoe", source=TenantSource.DEVELOPMENT_OVERRIDE)

    with pytest.raises(dataclasses.FrozenInstanceError):
        context.username = "mallory"  # type: ignore[misc]


def test_source_serializes_as_plain_string():
    assert str(TenantSource.DEVELOPMENT_OVERRIDE) == "development_override"
