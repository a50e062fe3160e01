"""
Stream Outcomes.

The result of planning one stream request. Response headers are derived
from an outcome alone.
"""

from dataclasses import dataclass

from .models import StreamRange


class StreamOutcome:
    """Base class for stream outcomes"""


@dataclass(frozen=True)
class FullContent(StreamOutcome):
    total_length: int


@dataclass(frozen=True)
class PartialContent(StreamOutcome):
    range: StreamRange
    total_length: int


@dataclass(frozen=True)
class NotFound(StreamOutcome):
    message: str = "Video not found"


@dataclass(frozen=True)
class Gone(StreamOutcome):
    message: str = "File missing on server"


@dataclass(frozen=True)
class RangeNotSatisfiable(StreamOutcome):
    total_length: int
    message: str = "Range not satisfiable"


@dataclass(frozen=True)
class BytesUnavailable(StreamOutcome):
    message: str = "Media temporarily unavailable"
