"""
Video API Routes.

FastAPI route definitions for media streaming and the media catalog.
"""

from fastapi import APIRouter, Query, Request

from .controllers import VideoController, StreamingController
from .schemas import MediaInfoResponse, MediaListResponse, ViewResponse, StreamingInfoResponse


def create_video_routes(
    video_controller: VideoController,
    streaming_controller: StreamingController
) -> APIRouter:
    """Create media API routes with dependency injection"""

    router = APIRouter(prefix="/media", tags=["media"])

    @router.get("/", response_model=MediaListResponse)
    async def list_videos(
        limit: int = Query(100, ge=1, le=1000, description="Maximum number of results")
    ):
        """
        List public media, newest first.

        - **limit**: Maximum number of records to return
        """
        return await video_controller.list_videos(limit=limit)

    @router.get("/user/{owner_id}", response_model=MediaListResponse)
    async def list_user_videos(owner_id: str):
        """
        List public media uploaded by one user, newest first.

        - **owner_id**: Owner identifier
        """
        return await video_controller.list_user_videos(owner_id)

    @router.get("/{media_id}", response_model=MediaInfoResponse)
    async def get_video_info(media_id: str):
        """
        Get the stored record of a media item.

        - **media_id**: Unique identifier of the media
        """
        return await video_controller.get_video_info(media_id)

    @router.get("/{media_id}/stream")
    async def stream_video(media_id: str, request: Request):
        """
        Stream media with HTTP range request support.

        Supports:
        - **Full content**: 200 with the whole file when no Range header is sent
        - **Partial content**: 206 for `Range: bytes=start-end`, `bytes=start-` and `bytes=-suffix`
        - **Unsatisfiable ranges**: 416 with `Content-Range: bytes */length`

        Usage in HTML5:
        ```html
        <video controls>
            <source src="/media/{media_id}/stream" type="video/mp4">
        </video>
        ```
        """
        return await streaming_controller.stream_video(media_id, request)

    @router.head("/{media_id}/stream")
    async def head_video(media_id: str, request: Request):
        """Headers of the stream response without a body; no view is counted."""
        return await streaming_controller.head_video(media_id, request)

    @router.get("/{media_id}/info", response_model=StreamingInfoResponse)
    async def get_streaming_info(media_id: str):
        """
        Get streaming information for a media item.

        Returns the file size, content type, range support and read chunk size.
        """
        return await streaming_controller.get_streaming_info(media_id)

    @router.post("/{media_id}/view", response_model=ViewResponse)
    async def register_view(media_id: str):
        """
        Count one view for media played from an external URL.

        - **media_id**: Media identifier
        """
        return await video_controller.register_view(media_id)

    return router
