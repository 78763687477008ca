"""Value objects for the media domain.

Validation here raises ValueError; the application services translate it to
the media port exceptions so the domain stays framework and transport free.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

ALLOWED_EXTENSIONS: tuple[str, ...] = (
    "jpg",
    "jpeg",
    "png",
    "gif",
    "webp",
    "heic",
    "svg",
)
MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class UploadState(StrEnum):
    """Progress of a single upload through the two stores."""

    VALIDATED = "validated"
    BLOB_WRITTEN = "blob_written"
    METADATA_WRITTEN = "metadata_written"


class DeleteState(StrEnum):
    """Progress of a single delete through the two stores."""

    VERIFIED = "verified"
    METADATA_DELETED = "metadata_deleted"
    BLOB_DELETED = "blob_deleted"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date/time and normalize it to UTC.

    Naive values are taken as UTC. Accepts a trailing ``Z`` designator.

    Raises:
        ValueError: If ``value`` is not a valid ISO-8601 date/time, or its
            UTC equivalent falls outside years 1-9999.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"Timestamp out of range in UTC: {value}") from e


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ISO-8601 with millisecond precision and ``Z``."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def file_extension(filename: str) -> str | None:
    """Lower-cased suffix after the last dot, or None if there is none."""
    if "." not in filename:
        return None
    extension = filename.rsplit(".", 1)[1].lower()
    return extension or None


def sanitize_asset_name(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_-]`` with ``_``."""
    return _UNSAFE_NAME_CHARS.sub("_", name)


@dataclass(frozen=True)
class UploadMetadata:
    """Caller-supplied metadata accompanying an upload.

    Attributes:
        name: Display name of the photo. Never empty.
        captured: When the photo was taken, in UTC.
        captured_text: The caller's ``captured`` string, offset included.
        caption: Optional free text caption.
    """

    name: str
    captured: datetime
    captured_text: str
    caption: str | None = None

    @classmethod
    def from_json(cls, raw: str) -> UploadMetadata:
        """Parse and validate the metadata form field.

        Args:
            raw: JSON text of the metadata object.

        Returns:
            Validated UploadMetadata.

        Raises:
            ValueError: With a caller-facing message describing the problem.
        """
        try:
            data: Any = json.loads(raw)
        except ValueError as e:
            raise ValueError("Invalid metadata JSON") from e

        if not isinstance(data, dict):
            raise ValueError("Metadata must be an object")

        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Missing or invalid name in metadata")

        captured = data.get("captured")
        if not isinstance(captured, str) or not captured:
            raise ValueError("Missing or invalid captured date in metadata")
        try:
            captured_at = parse_timestamp(captured)
        except ValueError as e:
            raise ValueError("Invalid captured date format (expected ISO8601)") from e

        caption = data.get("caption")
        if caption is not None and not isinstance(caption, str):
            raise ValueError("Invalid caption type in metadata")

        return cls(
            name=name,
            captured=captured_at,
            captured_text=captured.strip(),
            caption=caption or None,
        )


@dataclass(frozen=True)
class StoredFilename:
    """Filename under which a blob is stored: ``{tenant}_{name}.{ext}``."""

    tenant: str
    safe_name: str
    extension: str

    @classmethod
    def build(cls, tenant: str, asset_name: str, extension: str) -> StoredFilename:
        return cls(
            tenant=tenant,
            safe_name=sanitize_asset_name(asset_name),
            extension=extension,
        )

    def __str__(self) -> str:
        return f"{self.tenant}_{self.safe_name}.{self.extension}"


def validate_upload_file(filename: str, size: int) -> str:
    """Check a file's extension and size.

    Args:
        filename: Original client filename.
        size: File size in bytes.

    Returns:
        The lower-cased extension.

    Raises:
        UnsupportedExtension: If the extension is missing or not allowed.
        OversizedFile: If the file exceeds the size limit.
    """
    extension = file_extension(filename)
    if extension not in ALLOWED_EXTENSIONS:
        raise UnsupportedExtension(extension)
    if size > MAX_FILE_SIZE_BYTES:
        raise OversizedFile(size)
    return extension


class UnsupportedExtension(ValueError):
    """A file extension outside ALLOWED_EXTENSIONS."""

    def __init__(self, extension: str | None):
        super().__init__(
            f"Invalid file extension: {extension}. "
            f"Allowed: {', '.join(ALLOWED_EXTENSIONS)}"
        )
        self.extension = extension


class OversizedFile(ValueError):
    """A file larger than MAX_FILE_SIZE_BYTES."""

    def __init__(self, size: int):
        super().__init__(
            f"File too large: {size / 1024 / 1024:.2f} MB. "
            f"Maximum: {MAX_FILE_SIZE_MB} MB"
        )
        self.size = size
