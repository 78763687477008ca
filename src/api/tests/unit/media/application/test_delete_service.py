"""Unit tests for MediaDeleteService."""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from media.application.observability import MediaDeleteProbe
from media.application.services import MediaDeleteService
from media.ports.exceptions import (
    AssetForbiddenError,
    AssetNotFoundError,
    BlobStoreRejectedError,
    BlobStoreUnavailableError,
    InvalidAssetIdError,
    MediaStoreError,
    MetadataDeleteFailedError,
)


@pytest.fixture
def mock_probe():
    return Mock(spec=MediaDeleteProbe)


@pytest.fixture
def service(mock_repository, mock_blob_store, mock_session, mock_probe, make_asset):
    mock_repository.get_owned.return_value = make_asset()
    mock_repository.delete.return_value = True
    mock_blob_store.delete.return_value = None
    return MediaDeleteService(
        repository=mock_repository,
        blob_store=mock_blob_store,
        session=mock_session,
        probe=mock_probe,
    )


class TestSuccessfulDelete:
    @pytest.mark.asyncio
    async def test_deletes_row_then_blob(
        self, service, caller, mock_repository, mock_blob_store, mock_probe
    ):
        result = await service.delete("johndoe", caller, "img-1")

        assert result.asset_id == "img-1"
        assert result.metadata_deleted is True
        assert result.blob_deleted is True
        assert result.warning is None
        mock_repository.get_owned.assert_awaited_once_with("img-1", "johndoe")
        mock_repository.delete.assert_awaited_once_with("img-1", "johndoe")
        mock_blob_store.delete.assert_awaited_once_with("img-1")
        mock_probe.delete_completed.assert_called_once_with(
            tenant="johndoe",
            caller_id="abc123.access",
            asset_id="img-1",
            blob_deleted=True,
        )

    @pytest.mark.asyncio
    async def test_row_is_deleted_before_blob(
        self, service, caller, mock_repository, mock_blob_store
    ):
        order = []
        mock_repository.delete.side_effect = lambda *a: order.append("row") or True
        mock_blob_store.delete.side_effect = lambda *a: order.append("blob")

        await service.delete("johndoe", caller, "img-1")

        assert order == ["row", "blob"]

    @pytest.mark.asyncio
    async def test_trims_asset_id(self, service, caller, mock_repository):
        await service.delete("johndoe", caller, "  img-1 ")

        mock_repository.get_owned.assert_awaited_once_with("img-1", "johndoe")

    @pytest.mark.asyncio
    async def test_verify_and_delete_use_separate_transactions(
        self, service, caller, mock_session
    ):
        await service.delete("johndoe", caller, "img-1")

        assert mock_session.begin.call_count == 2

    @pytest.mark.asyncio
    async def test_owned_asset_skips_global_lookup(
        self, service, caller, mock_repository
    ):
        await service.delete("johndoe", caller, "img-1")

        mock_repository.get_by_id.assert_not_awaited()


class TestBlobDeleteFailure:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            BlobStoreRejectedError("Image delete failed: gone", reason="Image not found"),
            BlobStoreUnavailableError("Failed to delete image", reason="timeout"),
        ],
    )
    async def test_downgrades_to_warning(
        self, service, caller, mock_blob_store, mock_probe, error
    ):
        mock_blob_store.delete.side_effect = error

        result = await service.delete("johndoe", caller, "img-1")

        assert result.metadata_deleted is True
        assert result.blob_deleted is False
        assert result.warning == f"Failed to delete from storage: {error.reason}"
        mock_probe.blob_delete_failed.assert_called_once()


class TestRejectedDelete:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("asset_id", ["", "   "])
    async def test_blank_id_is_invalid(
        self, service, caller, mock_repository, mock_session, asset_id
    ):
        with pytest.raises(InvalidAssetIdError, match="Invalid image ID"):
            await service.delete("johndoe", caller, asset_id)

        mock_session.begin.assert_not_called()
        mock_repository.get_owned.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_foreign_asset_is_forbidden(
        self, service, caller, mock_repository, mock_blob_store, mock_probe, make_asset
    ):
        mock_repository.get_owned.return_value = None
        mock_repository.get_by_id.return_value = make_asset(username="janedoe")

        with pytest.raises(AssetForbiddenError) as exc_info:
            await service.delete("johndoe", caller, "img-1")

        assert str(exc_info.value) == "Forbidden"
        assert "janedoe" not in str(exc_info.value)
        mock_probe.foreign_asset_delete_attempt.assert_called_once_with(
            tenant="johndoe",
            caller_id="abc123.access",
            asset_id="img-1",
            owner="janedoe",
        )
        mock_repository.delete.assert_not_awaited()
        mock_blob_store.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_asset_is_not_found(
        self, service, caller, mock_repository, mock_blob_store, mock_probe
    ):
        mock_repository.get_owned.return_value = None
        mock_repository.get_by_id.return_value = None

        with pytest.raises(AssetNotFoundError, match="Image not found"):
            await service.delete("johndoe", caller, "img-404")

        mock_probe.asset_not_found.assert_called_once_with(
            tenant="johndoe", asset_id="img-404"
        )
        mock_blob_store.delete.assert_not_awaited()


class TestMetadataDeleteFailure:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            MediaStoreError("delete failed"),
            OperationalError("DELETE", {}, Exception("connection reset")),
        ],
    )
    async def test_store_error_leaves_blob(
        self, service, caller, mock_repository, mock_blob_store, mock_probe, error
    ):
        mock_repository.delete.side_effect = error

        with pytest.raises(
            MetadataDeleteFailedError, match="Failed to delete image from database"
        ):
            await service.delete("johndoe", caller, "img-1")

        mock_blob_store.delete.assert_not_awaited()
        mock_probe.metadata_delete_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_row_vanishing_between_transactions(
        self, service, caller, mock_repository, mock_blob_store
    ):
        mock_repository.delete.return_value = False

        with pytest.raises(MetadataDeleteFailedError):
            await service.delete("johndoe", caller, "img-1")

        mock_blob_store.delete.assert_not_awaited()
