"""Domain probes for the media application layer."""

from media.application.observability.delete_probe import (
    DefaultMediaDeleteProbe,
    MediaDeleteProbe,
)
from media.application.observability.query_probe import (
    DefaultMediaQueryProbe,
    MediaQueryProbe,
)
from media.application.observability.upload_probe import (
    DefaultMediaUploadProbe,
    MediaUploadProbe,
)

__all__ = [
    "DefaultMediaDeleteProbe",
    "DefaultMediaQueryProbe",
    "DefaultMediaUploadProbe",
    "MediaDeleteProbe",
    "MediaQueryProbe",
    "MediaUploadProbe",
]
