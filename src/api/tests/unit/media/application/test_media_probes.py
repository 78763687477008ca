"""Unit tests for media application domain probes."""

from unittest.mock import MagicMock

import structlog

from media.application.observability import (
    DefaultMediaDeleteProbe,
    DefaultMediaQueryProbe,
    DefaultMediaUploadProbe,
)
from shared_kernel.observability_context import ObservationContext


def make_logger():
    return MagicMock(spec=structlog.stdlib.BoundLogger)


class TestMediaUploadProbe:
    def test_orphaned_blob_logs_error_with_state(self):
        logger = make_logger()
        probe = DefaultMediaUploadProbe(logger=logger)

        probe.orphaned_blob(
            tenant="johndoe",
            blob_id="img-1",
            filename="johndoe_Beach_Day.jpg",
            error="connection reset",
        )

        logger.error.assert_called_once_with(
            "media_orphaned_blob",
            tenant="johndoe",
            blob_id="img-1",
            filename="johndoe_Beach_Day.jpg",
            error="connection reset",
            state="blob_written",
            operation="upload",
        )

    def test_with_context_includes_request_metadata(self):
        logger = make_logger()
        context = ObservationContext(request_id="req-1", caller_id="abc123.access")
        probe = DefaultMediaUploadProbe(logger=logger).with_context(context)

        probe.upload_completed(
            tenant="johndoe",
            caller_id="abc123.access",
            asset_id="img-1",
            filename="johndoe_Beach_Day.jpg",
        )

        kwargs = logger.info.call_args.kwargs
        assert kwargs["request_id"] == "req-1"
        assert kwargs["state"] == "metadata_written"

    def test_blob_write_failed_logs_error(self):
        logger = make_logger()
        probe = DefaultMediaUploadProbe(logger=logger)

        probe.blob_write_failed(tenant="johndoe", filename="x.jpg", error="timeout")

        assert logger.error.call_args.args == ("media_blob_write_failed",)
        assert logger.error.call_args.kwargs["state"] == "validated"


class TestMediaDeleteProbe:
    def test_foreign_delete_attempt_logs_owner(self):
        logger = make_logger()
        probe = DefaultMediaDeleteProbe(logger=logger)

        probe.foreign_asset_delete_attempt(
            tenant="johndoe",
            caller_id="abc123.access",
            asset_id="img-1",
            owner="janedoe",
        )

        logger.warning.assert_called_once_with(
            "media_delete_forbidden",
            tenant="johndoe",
            caller_id="abc123.access",
            asset_id="img-1",
            owner="janedoe",
        )

    def test_blob_delete_failed_logs_error(self):
        logger = make_logger()
        probe = DefaultMediaDeleteProbe(logger=logger)

        probe.blob_delete_failed(tenant="johndoe", asset_id="img-1", error="timeout")

        assert logger.error.call_args.kwargs["state"] == "metadata_deleted"

    def test_delete_completed_state_reflects_blob_outcome(self):
        logger = make_logger()
        probe = DefaultMediaDeleteProbe(logger=logger)

        probe.delete_completed(
            tenant="johndoe", caller_id="c", asset_id="img-1", blob_deleted=False
        )
        probe.delete_completed(
            tenant="johndoe", caller_id="c", asset_id="img-2", blob_deleted=True
        )

        states = [call.kwargs["state"] for call in logger.info.call_args_list]
        assert states == ["metadata_deleted", "blob_deleted"]


class TestMediaQueryProbe:
    def test_default_probe_creates_with_default_logger(self):
        probe = DefaultMediaQueryProbe()
        assert probe._logger is not None

    def test_assets_listed(self):
        logger = make_logger()
        probe = DefaultMediaQueryProbe(logger=logger)

        probe.assets_listed(tenant="johndoe", offset=15, count=3, has_more=False)

        logger.debug.assert_called_once()


class TestBoundContextFields:
    def test_event_tenant_and_caller_take_precedence_over_context(self):
        logger = make_logger()
        context = ObservationContext(
            request_id="req-1", tenant="stale", caller_id="someone-else"
        )
        probe = DefaultMediaUploadProbe(logger=logger).with_context(context)

        probe.upload_completed(
            tenant="johndoe",
            caller_id="abc123.access",
            asset_id="img-1",
            filename="johndoe_Beach_Day.jpg",
        )

        kwargs = logger.info.call_args.kwargs
        assert kwargs["tenant"] == "johndoe"
        assert kwargs["caller_id"] == "abc123.access"
        assert kwargs["request_id"] == "req-1"

    def test_delete_events_accept_fully_populated_context(self):
        logger = make_logger()
        context = ObservationContext(
            request_id="req-1", tenant="johndoe", caller_id="abc123.access"
        )
        probe = DefaultMediaDeleteProbe(logger=logger).with_context(context)

        probe.delete_completed(
            tenant="johndoe",
            caller_id="abc123.access",
            asset_id="img-1",
            blob_deleted=True,
        )

        assert logger.info.call_args.args == ("media_delete_completed",)
        assert logger.info.call_args.kwargs["request_id"] == "req-1"
