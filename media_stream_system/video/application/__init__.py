"""
Video Application Layer.

Contains use cases and application services that orchestrate domain logic
and coordinate between domain and infrastructure layers.
"""

from .video_service import VideoService
from .streaming_service import StreamingService, StreamPlan
from .response_composer import ResponseHead, compose_response_head
from .view_accounting import ViewAccountant

__all__ = [
    "VideoService",
    "StreamingService",
    "StreamPlan",
    "ResponseHead",
    "compose_response_head",
    "ViewAccountant",
]
