"""Shared fixtures for media application service tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from media.domain import MediaAsset
from media.ports.repositories import IBlobStore, IMediaRepository
from shared_kernel.auth import Identity


@pytest.fixture
def mock_session():
    """Create mock async session whose begin() is an async context manager."""
    session = AsyncMock()
    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    return session


@pytest.fixture
def mock_repository():
    return create_autospec(IMediaRepository, instance=True)


@pytest.fixture
def mock_blob_store():
    return create_autospec(IBlobStore, instance=True)


@pytest.fixture
def caller():
    return Identity.service_token("abc123.access")


@pytest.fixture
def make_asset():
    def _make(
        asset_id: str = "img-1",
        username: str = "johndoe",
        name: str = "Beach Day",
        captured: datetime | None = None,
    ) -> MediaAsset:
        when = captured or datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        return MediaAsset(
            id=asset_id,
            username=username,
            name=name,
            captured=when,
            uploaded=datetime(2024, 2, 1, tzinfo=timezone.utc),
        )

    return _make
