"""
Video Presentation Layer.

Contains HTTP controllers, request/response models, and API route definitions.
"""

from .controllers import VideoController, StreamingController
from .schemas import MediaInfoResponse, MediaListResponse, ViewResponse, StreamingInfoResponse
from .routes import create_video_routes

__all__ = [
    "VideoController",
    "StreamingController",
    "MediaInfoResponse",
    "MediaListResponse",
    "ViewResponse",
    "StreamingInfoResponse",
    "create_video_routes",
]
