"""Upload followed by delete through both media pipelines.

The repository mock is backed by a dict so the row written by the upload is
the one the delete pipeline looks up.
"""

import json
from unittest.mock import Mock

import pytest

from media.application.observability import MediaDeleteProbe, MediaUploadProbe
from media.application.services import MediaDeleteService, MediaUploadService
from media.ports.exceptions import AssetForbiddenError, AssetNotFoundError
from shared_kernel.auth import Identity


@pytest.fixture
def rows(mock_repository):
    rows = {}

    async def add(asset):
        rows[asset.id] = asset

    async def get_owned(asset_id, username):
        asset = rows.get(asset_id)
        return asset if asset is not None and asset.username == username else None

    async def get_by_id(asset_id):
        return rows.get(asset_id)

    async def delete(asset_id, username):
        if asset_id in rows and rows[asset_id].username == username:
            del rows[asset_id]
            return True
        return False

    mock_repository.add.side_effect = add
    mock_repository.get_owned.side_effect = get_owned
    mock_repository.get_by_id.side_effect = get_by_id
    mock_repository.delete.side_effect = delete
    return rows


@pytest.fixture
def uploader(mock_repository, mock_blob_store, mock_session):
    mock_blob_store.upload.return_value = ("img-42", "johndoe_Beach_Day.jpg")
    return MediaUploadService(
        repository=mock_repository,
        blob_store=mock_blob_store,
        session=mock_session,
        probe=Mock(spec=MediaUploadProbe),
    )


@pytest.fixture
def deleter(mock_repository, mock_blob_store, mock_session):
    mock_blob_store.delete.return_value = None
    return MediaDeleteService(
        repository=mock_repository,
        blob_store=mock_blob_store,
        session=mock_session,
        probe=Mock(spec=MediaDeleteProbe),
    )


async def upload_beach_day(uploader, caller):
    return await uploader.upload(
        tenant="johndoe",
        identity=caller,
        content=b"\xff\xd8\xff" * 10,
        filename="vacation.jpg",
        content_type="image/jpeg",
        metadata_json=json.dumps({"name": "Beach Day", "captured": "2024-01-15"}),
    )


@pytest.mark.asyncio
async def test_uploaded_asset_is_owned_and_deletable_by_its_tenant(
    uploader, deleter, caller, rows, mock_blob_store
):
    uploaded = await upload_beach_day(uploader, caller)

    assert rows[uploaded.asset_id].username == "johndoe"

    result = await deleter.delete("johndoe", caller, uploaded.asset_id)

    assert result.asset_id == "img-42"
    assert result.metadata_deleted is True
    assert result.blob_deleted is True
    assert rows == {}
    mock_blob_store.delete.assert_awaited_once_with("img-42")


@pytest.mark.asyncio
async def test_uploaded_asset_is_forbidden_to_other_tenants(
    uploader, deleter, caller, rows
):
    uploaded = await upload_beach_day(uploader, caller)

    with pytest.raises(AssetForbiddenError):
        await deleter.delete(
            "mallory", Identity.service_token("m.access"), uploaded.asset_id
        )

    assert uploaded.asset_id in rows


@pytest.mark.asyncio
async def test_second_delete_reports_not_found(uploader, deleter, caller, rows):
    uploaded = await upload_beach_day(uploader, caller)
    await deleter.delete("johndoe", caller, uploaded.asset_id)

    with pytest.raises(AssetNotFoundError):
        await deleter.delete("johndoe", caller, uploaded.asset_id)
