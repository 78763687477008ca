"""HTTP routes for the media bounded context.

Admin routes require an AuthorizedTenantContext, so they only run after the
tenant was resolved from the Host, the caller identity was extracted and the
authorization gate passed. The public listing only needs the tenant.

Failures are raised as domain exceptions and rendered by the shared error
handlers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from media.application.services import (
    MediaDeleteService,
    MediaQueryService,
    MediaUploadService,
)
from media.dependencies import get_delete_service, get_query_service, get_upload_service
from media.ports.exceptions import MissingUploadFileError
from media.presentation.models import (
    DeleteResponse,
    ImageListResponse,
    ImageLookupResponse,
    UploadResponse,
)
from shared_kernel.middleware.tenant_context import AuthorizedTenantContext, TenantContext
from tenancy.dependencies import get_authorized_tenant_context, resolve_tenant

admin_router = APIRouter(
    prefix="/admin/api",
    tags=["media-admin"],
)

public_router = APIRouter(
    prefix="/api",
    tags=["media"],
)


@admin_router.post("/upload")
async def upload_image(
    context: Annotated[AuthorizedTenantContext, Depends(get_authorized_tenant_context)],
    service: Annotated[MediaUploadService, Depends(get_upload_service)],
    file: Annotated[UploadFile | None, File()] = None,
    metadata: Annotated[str | None, Form()] = None,
) -> UploadResponse:
    """Upload a photo for the authorized tenant.

    Expects multipart form data with a ``file`` part and a ``metadata`` part
    holding a JSON object with ``name``, ``captured`` and optional ``caption``.
    """
    if file is None or not file.filename:
        raise MissingUploadFileError("Missing or invalid file")

    content = await file.read()
    result = await service.upload(
        tenant=context.username,
        identity=context.identity,
        content=content,
        filename=file.filename,
        content_type=file.content_type,
        metadata_json=metadata,
    )
    return UploadResponse.from_domain(result)


@admin_router.delete("/delete/{asset_id}", response_model_exclude_none=True)
async def delete_image(
    asset_id: str,
    context: Annotated[AuthorizedTenantContext, Depends(get_authorized_tenant_context)],
    service: Annotated[MediaDeleteService, Depends(get_delete_service)],
) -> DeleteResponse:
    """Delete one of the authorized tenant's photos.

    A blob that could not be removed is reported in ``warning``; the delete
    itself still succeeds.
    """
    result = await service.delete(
        tenant=context.username,
        identity=context.identity,
        asset_id=asset_id,
    )
    return DeleteResponse.from_domain(result)


@admin_router.get("/images/by-name/{name}")
async def get_image_by_name(
    name: str,
    context: Annotated[AuthorizedTenantContext, Depends(get_authorized_tenant_context)],
    service: Annotated[MediaQueryService, Depends(get_query_service)],
) -> ImageLookupResponse:
    """Look up the tenant's most recently uploaded photo with ``name``."""
    asset = await service.find_by_name(tenant=context.username, name=name)
    return ImageLookupResponse.from_domain(asset)


@public_router.get("/images")
async def list_images(
    tenant: Annotated[TenantContext, Depends(resolve_tenant)],
    service: Annotated[MediaQueryService, Depends(get_query_service)],
    offset: str | None = None,
) -> ImageListResponse:
    """List one page of the tenant served on this Host, newest first."""
    try:
        start = int(offset) if offset else 0
    except ValueError:
        start = 0
    page = await service.list_assets(tenant=tenant.username, offset=start)
    return ImageListResponse.from_domain(page)
