"""
Video Module for the Media Stream System.

This module provides byte-range streaming of stored media and view accounting,
following clean architecture principles.
"""

from .domain.models import MediaRecord, StreamRange, BackingBytes, resolve_range
from .application.video_service import VideoService
from .application.streaming_service import StreamingService
from .application.view_accounting import ViewAccountant
from .integration import VideoModule, create_video_module

__all__ = ["MediaRecord", "StreamRange", "BackingBytes", "resolve_range", "VideoService", "StreamingService", "ViewAccountant", "VideoModule", "create_video_module"]
