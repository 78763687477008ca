"""Tenant directory backed by Cloudflare Workers KV.

Values are read through the KV REST API:

    GET {base}/accounts/{account}/storage/kv/namespaces/{namespace}/values/{key}

A 404 means the key does not exist. Every other failure is surfaced once as
TenantDirectoryUnavailableError; there is no retry.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from shared_kernel.exceptions import ConfigurationError
from tenancy.domain.aggregates import Avatar, Tenant
from tenancy.infrastructure.observability import (
    DefaultTenantDirectoryProbe,
    TenantDirectoryProbe,
)
from tenancy.ports.exceptions import TenantDirectoryUnavailableError
from tenancy.ports.repositories import domain_key, tenant_key


class AvatarDocument(BaseModel):
    id: str
    variant: str


class ProfileDocument(BaseModel):
    name: str | None = None


class TenantDocument(BaseModel):
    """JSON document stored under ``user:{username}``."""

    model_config = ConfigDict(extra="ignore")

    domains: list[str] = Field(default_factory=list)
    profile: ProfileDocument = Field(default_factory=ProfileDocument)
    avatar: AvatarDocument | None = None
    authorized_client_ids: list[str] = Field(default_factory=list)

    def to_domain(self, username: str) -> Tenant:
        """Convert the stored document to a Tenant aggregate."""
        return Tenant(
            username=username,
            domains=tuple(self.domains),
            display_name=self.profile.name,
            avatar=(
                Avatar(id=self.avatar.id, variant=self.avatar.variant)
                if self.avatar
                else None
            ),
            authorized_client_ids=frozenset(self.authorized_client_ids),
        )


class UnconfiguredTenantDirectory:
    """Stand-in used when no directory credentials are configured.

    Lets loopback development run with only the override settings; any real
    directory read fails with ConfigurationError.
    """

    def __init__(self, missing: list[str]):
        self._missing = missing

    def _fail(self) -> ConfigurationError:
        return ConfigurationError(
            "Tenant directory is not configured; missing "
            + ", ".join(self._missing)
        )

    async def get_username_for_domain(self, hostname: str) -> str | None:
        raise self._fail()

    async def get_tenant(self, username: str) -> Tenant | None:
        raise self._fail()


class CloudflareKVTenantDirectory:
    """ITenantDirectory implementation over the Workers KV REST API."""

    def __init__(
        self,
        account_id: str,
        namespace_id: str,
        api_token: str,
        api_base_url: str = "https://api.cloudflare.com/client/v4",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        probe: TenantDirectoryProbe | None = None,
    ):
        """Initialize the directory.

        Args:
            account_id: Cloudflare account id.
            namespace_id: KV namespace holding tenant records.
            api_token: Bearer token with KV read permission.
            api_base_url: API root, overridable for tests and proxies.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (tests use MockTransport).
            probe: Optional domain probe for observability.
        """
        self._values_url = (
            f"{api_base_url.rstrip('/')}/accounts/{account_id}"
            f"/storage/kv/namespaces/{namespace_id}/values"
        )
        self._api_token = api_token
        self._timeout = timeout
        self._transport = transport
        self._probe = probe or DefaultTenantDirectoryProbe()

    @property
    def _request_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_token}"}

    async def _read(self, key: str) -> str | None:
        url = f"{self._values_url}/{quote(key, safe='')}"
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.get(url, headers=self._request_headers)
        except httpx.HTTPError as e:
            self._probe.key_read_failed(key=key, reason=repr(e))
            raise TenantDirectoryUnavailableError(
                f"Tenant directory request failed: {e}"
            ) from e

        if response.status_code == 404:
            self._probe.key_read(key=key, found=False)
            return None

        if not response.is_success:
            self._probe.key_read_failed(
                key=key,
                reason="HTTP error",
                status_code=response.status_code,
            )
            raise TenantDirectoryUnavailableError(
                f"Tenant directory returned HTTP {response.status_code}"
            )

        self._probe.key_read(key=key, found=True)
        return response.text

    async def get_username_for_domain(self, hostname: str) -> str | None:
        value = await self._read(domain_key(hostname))
        if value is None:
            return None
        return value.strip() or None

    async def get_tenant(self, username: str) -> Tenant | None:
        key = tenant_key(username)
        value = await self._read(key)
        if value is None:
            return None

        try:
            document = TenantDocument.model_validate_json(value)
        except ValidationError as e:
            self._probe.malformed_record(key=key, reason=str(e))
            raise ConfigurationError(f"Malformed tenant record: {key}") from e

        return document.to_domain(username)
