"""Unit tests for media domain value objects."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from media.domain import (
    MAX_FILE_SIZE_BYTES,
    MediaAsset,
    OversizedFile,
    StoredFilename,
    UnsupportedExtension,
    UploadMetadata,
)
from media.domain.value_objects import (
    file_extension,
    format_timestamp,
    parse_timestamp,
    sanitize_asset_name,
    validate_upload_file,
)


class TestUploadMetadata:
    def test_parses_complete_metadata(self):
        metadata = UploadMetadata.from_json(
            json.dumps(
                {
                    "name": "Beach Day",
                    "captured": "2024-01-15T10:30:00Z",
                    "caption": "Summer",
                }
            )
        )

        assert metadata.name == "Beach Day"
        assert metadata.captured == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert metadata.caption == "Summer"

    def test_caption_is_optional(self):
        metadata = UploadMetadata.from_json(
            '{"name": "Beach Day", "captured": "2024-01-15"}'
        )

        assert metadata.caption is None

    def test_empty_caption_becomes_none(self):
        metadata = UploadMetadata.from_json(
            '{"name": "x", "captured": "2024-01-15", "caption": ""}'
        )

        assert metadata.caption is None

    def test_keeps_caller_captured_text(self):
        metadata = UploadMetadata.from_json(
            '{"name": "x", "captured": " 2024-01-15T12:30:00+02:00 "}'
        )

        assert metadata.captured_text == "2024-01-15T12:30:00+02:00"
        assert metadata.captured == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "captured", ["0001-01-01T00:00:00+05:00", "9999-12-31T23:30:00-05:00"]
    )
    def test_out_of_range_captured_is_invalid_format(self, captured):
        raw = json.dumps({"name": "x", "captured": captured})

        with pytest.raises(ValueError, match=r"Invalid captured date format"):
            UploadMetadata.from_json(raw)

    def test_date_only_is_midnight_utc(self):
        metadata = UploadMetadata.from_json('{"name": "x", "captured": "2024-01-15"}')

        assert metadata.captured == datetime(2024, 1, 15, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        ("raw", "message"),
        [
            ("{not json", "Invalid metadata JSON"),
            ('["Beach Day"]', "Metadata must be an object"),
            ('{"captured": "2024-01-15"}', "Missing or invalid name in metadata"),
            ('{"name": "  ", "captured": "2024-01-15"}', "Missing or invalid name"),
            ('{"name": 7, "captured": "2024-01-15"}', "Missing or invalid name"),
            ('{"name": "x"}', "Missing or invalid captured date in metadata"),
            ('{"name": "x", "captured": 1705312200}', "Missing or invalid captured"),
            (
                '{"name": "x", "captured": "yesterday"}',
                r"Invalid captured date format \(expected ISO8601\)",
            ),
            (
                '{"name": "x", "captured": "2024-01-15", "caption": 3}',
                "Invalid caption type in metadata",
            ),
        ],
    )
    def test_rejects_invalid_metadata(self, raw, message):
        with pytest.raises(ValueError, match=message):
            UploadMetadata.from_json(raw)


class TestTimestamps:
    def test_parse_normalizes_offset_to_utc(self):
        parsed = parse_timestamp("2024-01-15T12:30:00+02:00")

        assert parsed.utcoffset() == timedelta(0)
        assert parsed == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_parse_treats_naive_as_utc(self):
        parsed = parse_timestamp("2024-01-15")

        assert parsed == datetime(2024, 1, 15, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "value", ["0001-01-01T00:00:00+05:00", "9999-12-31T23:30:00-05:00"]
    )
    def test_parse_rejects_values_outside_utc_range(self, value):
        with pytest.raises(ValueError, match="out of range"):
            parse_timestamp(value)

    @pytest.mark.parametrize(
        "value", ["0001-01-01T00:00:00Z", "9999-12-31T23:59:59.999+00:00"]
    )
    def test_parse_accepts_utc_boundaries(self, value):
        assert format_timestamp(parse_timestamp(value))

    def test_format_uses_milliseconds_and_z(self):
        value = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)

        assert format_timestamp(value) == "2024-01-15T10:30:00.123Z"

    def test_format_converts_to_utc(self):
        value = parse_timestamp("2024-01-15T12:30:00+02:00")

        assert format_timestamp(value) == "2024-01-15T10:30:00.000Z"


class TestFileValidation:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("vacation.jpg", "jpg"),
            ("VACATION.JPG", "jpg"),
            ("archive.tar.png", "png"),
            ("noext", None),
            ("trailing.", None),
        ],
    )
    def test_file_extension(self, filename, expected):
        assert file_extension(filename) == expected

    @pytest.mark.parametrize(
        "filename", ["a.jpg", "a.jpeg", "a.png", "a.gif", "a.webp", "a.heic", "a.svg"]
    )
    def test_accepts_allowed_extensions(self, filename):
        assert validate_upload_file(filename, 1024) == filename.rsplit(".", 1)[1]

    def test_rejects_unknown_extension(self):
        with pytest.raises(UnsupportedExtension) as exc_info:
            validate_upload_file("notes.txt", 10)

        assert str(exc_info.value) == (
            "Invalid file extension: txt. "
            "Allowed: jpg, jpeg, png, gif, webp, heic, svg"
        )

    def test_rejects_missing_extension(self):
        with pytest.raises(UnsupportedExtension):
            validate_upload_file("photo", 10)

    def test_accepts_exactly_the_size_limit(self):
        assert validate_upload_file("a.png", MAX_FILE_SIZE_BYTES) == "png"

    def test_rejects_one_byte_over_limit(self):
        with pytest.raises(OversizedFile, match=r"File too large: 10\.00 MB"):
            validate_upload_file("a.png", MAX_FILE_SIZE_BYTES + 1)

    def test_extension_is_checked_before_size(self):
        with pytest.raises(UnsupportedExtension):
            validate_upload_file("a.txt", MAX_FILE_SIZE_BYTES * 2)


class TestStoredFilename:
    def test_vacation_example(self):
        filename = StoredFilename.build("johndoe", "Beach Day", "jpg")

        assert str(filename) == "johndoe_Beach_Day.jpg"

    def test_sanitizes_every_unsafe_character(self):
        assert sanitize_asset_name("Café & Bar/2024!") == "Caf____Bar_2024_"

    def test_keeps_dashes_and_underscores(self):
        assert sanitize_asset_name("day-1_final") == "day-1_final"


class TestMediaAsset:
    def test_ownership(self):
        now = datetime.now(timezone.utc)
        asset = MediaAsset(
            id="img-1", username="johndoe", name="x", captured=now, uploaded=now
        )

        assert asset.is_owned_by("johndoe")
        assert not asset.is_owned_by("janedoe")
