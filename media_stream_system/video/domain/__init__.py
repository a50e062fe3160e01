"""
Video Domain Layer.

Contains pure business logic and domain models for media streaming.
No external dependencies - only Python standard library and domain concepts.
"""

from .models import MediaRecord, MediaVisibility, StreamRange, BackingBytes, resolve_range
from .outcomes import StreamOutcome, FullContent, PartialContent, NotFound, Gone, RangeNotSatisfiable, BytesUnavailable
from .exceptions import MediaStreamError, MediaNotFound, MediaGone, MalformedRange, ResourceUnavailable, AccountingFailure
from .interfaces import MediaRepository, PartialReader, ByteStream, ViewCounter

__all__ = [
    "MediaRecord",
    "MediaVisibility",
    "StreamRange",
    "BackingBytes",
    "resolve_range",
    "StreamOutcome",
    "FullContent",
    "PartialContent",
    "NotFound",
    "Gone",
    "RangeNotSatisfiable",
    "BytesUnavailable",
    "MediaStreamError",
    "MediaNotFound",
    "MediaGone",
    "MalformedRange",
    "ResourceUnavailable",
    "AccountingFailure",
    "MediaRepository",
    "PartialReader",
    "ByteStream",
    "ViewCounter",
]
