"""
Video Domain Models.

Pure business entities and value objects for media streaming.
These models contain no external dependencies and represent core business concepts.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional
from enum import Enum

from .exceptions import MalformedRange


# Single byte-range-spec; either side may be empty, digits only
_RANGE_SPEC = re.compile(r"^([0-9]*)-([0-9]*)$")


class MediaVisibility(Enum):
    """Media visibility"""
    PUBLIC = "public"


@dataclass(frozen=True)
class StreamRange:
    """Resolved inclusive byte interval of a resource"""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise ValueError("Start byte cannot be negative")
        if self.end < self.start:
            raise ValueError("End byte cannot be less than start byte")

    @property
    def size(self) -> int:
        """Get range size in bytes"""
        return self.end - self.start + 1

    def content_range(self, total_length: int) -> str:
        """Content-Range header value for this interval"""
        return f"bytes {self.start}-{self.end}/{total_length}"

    @classmethod
    def from_header(cls, range_header: str, total_length: int) -> 'StreamRange':
        """
        Parse a single-range HTTP Range header against a resource length.

        Accepts ``bytes=start-end``, ``bytes=start-`` and ``bytes=-suffix``.
        An ``end`` past the resource is clamped to the last byte; a suffix
        larger than the resource selects the whole resource.

        Raises:
            MalformedRange: the header is not a single satisfiable range.
        """
        unit, sep, range_spec = range_header.strip().partition("=")
        if not sep or unit.strip().lower() != "bytes":
            raise MalformedRange(f"Unsupported range unit in {range_header!r}", total_length)

        range_spec = range_spec.strip()
        if "," in range_spec:
            raise MalformedRange("Multiple ranges are not supported", total_length)

        match = _RANGE_SPEC.match(range_spec)
        if not match:
            raise MalformedRange(f"Invalid range specification {range_spec!r}", total_length)

        start_str, end_str = match.groups()
        if not start_str and not end_str:
            raise MalformedRange("Empty range specification", total_length)

        if total_length <= 0:
            raise MalformedRange("Resource is empty", total_length)

        if not start_str:
            # Suffix range: "-500" means the last 500 bytes
            suffix_length = int(end_str)
            if suffix_length == 0:
                raise MalformedRange("Zero-length suffix range", total_length)
            return cls(start=max(0, total_length - suffix_length), end=total_length - 1)

        start = int(start_str)
        if start >= total_length:
            raise MalformedRange(f"Range start {start} beyond resource length {total_length}", total_length)

        if not end_str:
            return cls(start=start, end=total_length - 1)

        end = int(end_str)
        if end < start:
            raise MalformedRange(f"Range end {end} before start {start}", total_length)

        return cls(start=start, end=min(end, total_length - 1))


def resolve_range(range_header: Optional[str], total_length: int) -> Optional[StreamRange]:
    """Resolve an optional Range header; None means serve the whole resource"""
    if range_header is None:
        return None
    return StreamRange.from_header(range_header, total_length)


@dataclass
class MediaRecord:
    """Media record entity"""
    media_id: str
    title: str
    created_at: datetime
    file_path: Optional[str] = None
    external_url: Optional[str] = None
    size_bytes: Optional[int] = None
    views: int = 0
    owner_id: Optional[str] = None
    description: Optional[str] = None
    visibility: MediaVisibility = MediaVisibility.PUBLIC

    def __post_init__(self):
        """Validate media record data"""
        if not self.media_id:
            raise ValueError("Media ID cannot be empty")
        if not self.file_path and not self.external_url:
            raise ValueError("Media needs a file path or an external URL")
        if self.views < 0:
            raise ValueError("View count cannot be negative")
        if self.size_bytes is not None and self.size_bytes < 0:
            raise ValueError("Size cannot be negative")

    @property
    def has_local_bytes(self) -> bool:
        """Whether the record points at locally stored bytes"""
        return bool(self.file_path)


@dataclass(frozen=True)
class BackingBytes:
    """Location and length of a record's bytes at request time"""
    media_id: str
    path: Path
    total_length: int

    def full_range(self) -> Optional[StreamRange]:
        """Interval covering the whole resource, None when it is empty"""
        if self.total_length == 0:
            return None
        return StreamRange(start=0, end=self.total_length - 1)
