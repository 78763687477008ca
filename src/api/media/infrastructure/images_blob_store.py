"""Blob store backed by Cloudflare Images.

    POST   {base}/accounts/{account}/images/v1        multipart: file, metadata
    DELETE {base}/accounts/{account}/images/v1/{id}

Both answer with ``{success, result, errors[]}``. A transport failure maps to
BlobStoreUnavailableError; an HTTP error status, ``success: false`` or a
missing id maps to BlobStoreRejectedError. Nothing is retried.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from media.infrastructure.observability import BlobStoreProbe, DefaultBlobStoreProbe
from media.ports.exceptions import BlobStoreRejectedError, BlobStoreUnavailableError
from media.ports.repositories import IBlobStore


def _first_error_message(body: Any) -> str | None:
    if not isinstance(body, dict):
        return None
    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        message = errors[0].get("message")
        if isinstance(message, str) and message:
            return message
    return None


class CloudflareImagesBlobStore(IBlobStore):
    """IBlobStore implementation over the Cloudflare Images v1 API."""

    def __init__(
        self,
        account_id: str,
        api_token: str,
        api_base_url: str = "https://api.cloudflare.com/client/v4",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        probe: BlobStoreProbe | None = None,
    ):
        self._images_url = f"{api_base_url.rstrip('/')}/accounts/{account_id}/images/v1"
        self._api_token = api_token
        self._timeout = timeout
        self._transport = transport
        self._probe = probe or DefaultBlobStoreProbe()

    @property
    def _request_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_token}"}

    async def _send(self, operation: str, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout
            ) as client:
                response = await client.request(
                    method, url, headers=self._request_headers, **kwargs
                )
        except httpx.HTTPError as e:
            self._probe.request_failed(operation=operation, reason=repr(e))
            raise BlobStoreUnavailableError(
                f"Failed to {operation} image", reason=str(e) or repr(e)
            ) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            reason = _first_error_message(body) or response.reason_phrase
            self._probe.request_failed(
                operation=operation,
                reason=reason,
                status_code=response.status_code,
            )
            raise BlobStoreRejectedError(
                f"Image {operation} failed: {reason}", reason=reason
            )

        if not isinstance(body, dict) or body.get("success") is not True:
            reason = _first_error_message(body) or "Invalid response from image service"
            self._probe.request_failed(
                operation=operation,
                reason=reason,
                status_code=response.status_code,
            )
            raise BlobStoreRejectedError(
                f"Image {operation} failed: {reason}", reason=reason
            )

        return body

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str | None,
        metadata: Mapping[str, Any],
    ) -> tuple[str, str]:
        body = await self._send(
            "upload",
            "POST",
            self._images_url,
            files={
                "file": (filename, content, content_type or "application/octet-stream")
            },
            data={"metadata": json.dumps(dict(metadata))},
        )

        result = body.get("result")
        blob_id = result.get("id") if isinstance(result, dict) else None
        if not isinstance(blob_id, str) or not blob_id:
            self._probe.request_failed(
                operation="upload", reason="No image id in response"
            )
            raise BlobStoreRejectedError(
                "Invalid response from image service",
                reason="No image id in response",
            )

        stored_name = result.get("filename")
        if not isinstance(stored_name, str) or not stored_name:
            stored_name = filename

        self._probe.blob_uploaded(blob_id=blob_id, filename=stored_name)
        return blob_id, stored_name

    async def delete(self, blob_id: str) -> None:
        await self._send(
            "delete",
            "DELETE",
            f"{self._images_url}/{quote(blob_id, safe='')}",
        )
        self._probe.blob_deleted(blob_id=blob_id)
