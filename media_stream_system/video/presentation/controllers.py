"""
Video HTTP Controllers.

Handle HTTP requests and responses for media operations.
"""

import asyncio
import logging
from typing import AsyncIterator, Optional

from fastapi import HTTPException, Request, Response
from fastapi.responses import StreamingResponse

from ..application.video_service import VideoService
from ..application.streaming_service import StreamingService, StreamPlan
from ..application.view_accounting import ViewAccountant
from ..domain.interfaces import ByteStream
from ..domain.exceptions import MediaNotFound, ResourceUnavailable
from ..domain.models import MediaRecord
from .schemas import MediaInfoResponse, MediaListResponse, ViewResponse, StreamingInfoResponse


class ByteStreamResponse(StreamingResponse):
    """
    Streaming response that owns an opened byte stream.

    The stream is closed once the response finishes, whether the body was
    sent, cut short, or never started because the client went away first.
    """

    def __init__(self, content, byte_stream: Optional[ByteStream], **kwargs):
        super().__init__(content, **kwargs)
        self.byte_stream = byte_stream

    async def __call__(self, scope, receive, send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            if self.byte_stream is not None:
                await self.byte_stream.aclose()


class VideoController:
    """Controller for media catalog operations"""

    def __init__(self, video_service: VideoService):
        self.video_service = video_service
        self.logger = logging.getLogger(__name__)

    async def get_video_info(self, media_id: str) -> MediaInfoResponse:
        """Get media information"""
        record = await self.video_service.get_video_by_id(media_id)
        if not record:
            raise HTTPException(status_code=404, detail="Video not found")

        return self._convert_to_response(record)

    async def list_videos(self, limit: Optional[int] = 100) -> MediaListResponse:
        """List public media"""
        records = await self.video_service.list_videos(limit=limit)
        video_responses = [self._convert_to_response(record) for record in records]
        return MediaListResponse(videos=video_responses, total_count=len(video_responses))

    async def list_user_videos(self, owner_id: str) -> MediaListResponse:
        """List public media of one owner"""
        records = await self.video_service.list_videos_by_owner(owner_id)
        video_responses = [self._convert_to_response(record) for record in records]
        return MediaListResponse(videos=video_responses, total_count=len(video_responses))

    async def register_view(self, media_id: str) -> ViewResponse:
        """Count a view for media played from outside this server"""
        try:
            record = await self.video_service.register_view(media_id)
        except MediaNotFound:
            raise HTTPException(status_code=404, detail="Video not found")
        except Exception as e:
            self.logger.error(f"Error registering view for {media_id}: {e}")
            raise HTTPException(status_code=500, detail="Server error")

        return ViewResponse(video=self._convert_to_response(record))

    def _convert_to_response(self, record: MediaRecord) -> MediaInfoResponse:
        """Convert domain model to response model"""
        return MediaInfoResponse(
            media_id=record.media_id,
            title=record.title,
            description=record.description,
            owner_id=record.owner_id,
            file_path=record.file_path,
            external_url=record.external_url,
            size_bytes=record.size_bytes,
            views=record.views,
            visibility=record.visibility.value,
            created_at=record.created_at,
            is_streamable=record.has_local_bytes,
        )


class StreamingController:
    """Controller for media streaming operations"""

    def __init__(self, streaming_service: StreamingService, view_accountant: ViewAccountant):
        self.streaming_service = streaming_service
        self.view_accountant = view_accountant
        self.logger = logging.getLogger(__name__)

    async def get_streaming_info(self, media_id: str) -> StreamingInfoResponse:
        """Get streaming information for a media record"""
        backing = await self.streaming_service.get_stream_info(media_id)
        if not backing:
            raise HTTPException(status_code=404, detail="Video file not found")

        return StreamingInfoResponse(
            media_id=media_id,
            file_size_bytes=backing.total_length,
            content_type=self.streaming_service.content_type,
            supports_range_requests=True,
            chunk_size_bytes=self.streaming_service.chunk_size_bytes,
        )

    async def stream_video(self, media_id: str, request: Request) -> Response:
        """Stream media with range request support"""
        plan = await self.streaming_service.plan_stream(media_id, request.headers.get("range"))
        self._raise_for_plan(plan)

        try:
            body = await self.streaming_service.open_body(plan)
        except ResourceUnavailable as e:
            self.logger.error(f"Error opening stream for {media_id}: {e}")
            raise HTTPException(status_code=503, detail="Media temporarily unavailable")

        return ByteStreamResponse(
            self._stream_body(media_id, body),
            byte_stream=body,
            status_code=plan.head.status_code,
            headers=plan.head.headers,
        )

    async def head_video(self, media_id: str, request: Request) -> Response:
        """Answer a HEAD request with the headers a GET would send"""
        plan = await self.streaming_service.plan_stream(media_id, request.headers.get("range"))
        self._raise_for_plan(plan)
        return Response(status_code=plan.head.status_code, headers=plan.head.headers)

    def _raise_for_plan(self, plan: StreamPlan) -> None:
        if not plan.head.has_body:
            raise HTTPException(status_code=plan.head.status_code, detail=plan.head.detail, headers=plan.head.headers or None)

    async def _stream_body(self, media_id: str, body: Optional[ByteStream]) -> AsyncIterator[bytes]:
        # Iteration starts after the response head has been sent
        self.view_accountant.record_view(media_id)

        if body is None:
            return

        async with body:
            try:
                async for chunk in body:
                    yield chunk
            except ResourceUnavailable as e:
                # Headers are gone already; abort the connection
                self.logger.error(f"Aborting stream of {media_id}: {e}")
                raise
            except (asyncio.CancelledError, GeneratorExit):
                self.logger.info(f"Client disconnected from {media_id}")
                raise
