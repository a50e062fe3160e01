"""
Response Composer.

Maps a stream outcome onto the status code and header set of the HTTP
range-request contract. Nothing but the outcome and the content type is
consulted, so a head can be built and checked before any body byte exists.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..domain.outcomes import (
    StreamOutcome,
    FullContent,
    PartialContent,
    NotFound,
    Gone,
    RangeNotSatisfiable,
    BytesUnavailable,
)


@dataclass(frozen=True)
class ResponseHead:
    """Status line and headers of a stream response"""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    detail: Optional[str] = None

    @property
    def has_body(self) -> bool:
        return self.status_code in (200, 206)


def compose_response_head(outcome: StreamOutcome, content_type: str) -> ResponseHead:
    """Build the response head for an outcome"""
    if isinstance(outcome, FullContent):
        return ResponseHead(
            status_code=200,
            headers={
                "Accept-Ranges": "bytes",
                "Content-Length": str(outcome.total_length),
                "Content-Type": content_type,
            },
        )

    if isinstance(outcome, PartialContent):
        return ResponseHead(
            status_code=206,
            headers={
                "Content-Range": outcome.range.content_range(outcome.total_length),
                "Accept-Ranges": "bytes",
                "Content-Length": str(outcome.range.size),
                "Content-Type": content_type,
            },
        )

    if isinstance(outcome, (NotFound, Gone)):
        return ResponseHead(status_code=404, detail=outcome.message)

    if isinstance(outcome, RangeNotSatisfiable):
        return ResponseHead(
            status_code=416,
            headers={"Content-Range": f"bytes */{outcome.total_length}"},
            detail=outcome.message,
        )

    if isinstance(outcome, BytesUnavailable):
        return ResponseHead(status_code=503, detail=outcome.message)

    raise TypeError(f"Unknown stream outcome: {outcome!r}")
