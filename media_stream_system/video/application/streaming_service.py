"""
Video Streaming Application Service.

Handles the stream use case: look up the record, locate its bytes, resolve
the Range header, compose the response head and open the byte interval.
Each step either narrows the request or settles it as an outcome.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..domain.interfaces import MediaRepository, PartialReader, ByteStream
from ..domain.models import BackingBytes, StreamRange, resolve_range
from ..domain.exceptions import MediaGone, MalformedRange, ResourceUnavailable
from ..domain.outcomes import (
    StreamOutcome,
    FullContent,
    PartialContent,
    NotFound,
    Gone,
    RangeNotSatisfiable,
    BytesUnavailable,
)
from .response_composer import ResponseHead, compose_response_head


@dataclass(frozen=True)
class StreamPlan:
    """Everything decided about a stream request before any byte is sent"""
    media_id: str
    outcome: StreamOutcome
    head: ResponseHead
    backing: Optional[BackingBytes] = None
    byte_range: Optional[StreamRange] = None


class StreamingService:
    """Application service for media streaming"""

    def __init__(
        self,
        media_repository: MediaRepository,
        partial_reader: PartialReader,
        content_type: str = "video/mp4",
        chunk_size_bytes: int = 64 * 1024,
    ):
        self.media_repository = media_repository
        self.partial_reader = partial_reader
        self.content_type = content_type
        self.chunk_size_bytes = chunk_size_bytes
        self.logger = logging.getLogger(__name__)

    async def plan_stream(self, media_id: str, range_header: Optional[str] = None) -> StreamPlan:
        """Decide the outcome and response head of a stream request"""
        record = await self.media_repository.get_by_id(media_id)
        if record is None:
            return self._plan(media_id, NotFound())

        try:
            backing = await self.media_repository.resolve_backing_bytes(record)
        except MediaGone as e:
            self.logger.warning(str(e))
            return self._plan(media_id, Gone())
        except ResourceUnavailable as e:
            self.logger.error(f"Error locating bytes for {media_id}: {e}")
            return self._plan(media_id, BytesUnavailable())

        try:
            byte_range = resolve_range(range_header, backing.total_length)
        except MalformedRange as e:
            self.logger.info(f"Unsatisfiable range {range_header!r} for {media_id}: {e}")
            return self._plan(media_id, RangeNotSatisfiable(total_length=backing.total_length))

        if byte_range is None:
            return self._plan(media_id, FullContent(total_length=backing.total_length), backing, backing.full_range())

        self.logger.debug(f"Serving {media_id} {byte_range.content_range(backing.total_length)}")
        return self._plan(media_id, PartialContent(range=byte_range, total_length=backing.total_length), backing, byte_range)

    async def open_body(self, plan: StreamPlan) -> Optional[ByteStream]:
        """
        Open the byte interval of a plan.

        Returns None for plans without a body or with an empty resource.

        Raises:
            ResourceUnavailable: the backing file could not be opened.
        """
        if not plan.head.has_body or plan.backing is None or plan.byte_range is None:
            return None
        return await self.partial_reader.open_interval(plan.backing, plan.byte_range)

    async def get_stream_info(self, media_id: str) -> Optional[BackingBytes]:
        """Get the streamable bytes of a record, None if it cannot be streamed"""
        try:
            record = await self.media_repository.get_by_id(media_id)
            if record is None:
                return None
            return await self.media_repository.resolve_backing_bytes(record)

        except MediaGone:
            return None
        except Exception as e:
            self.logger.error(f"Error getting stream info for {media_id}: {e}")
            return None

    def _plan(
        self,
        media_id: str,
        outcome: StreamOutcome,
        backing: Optional[BackingBytes] = None,
        byte_range: Optional[StreamRange] = None,
    ) -> StreamPlan:
        head = compose_response_head(outcome, self.content_type)
        return StreamPlan(media_id=media_id, outcome=outcome, head=head, backing=backing, byte_range=byte_range)
