"""
Video API Request/Response Schemas.

Pydantic models for API serialization and validation.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class MediaInfoResponse(BaseModel):
    """Media record response"""
    media_id: str = Field(..., description="Unique media identifier")
    title: str = Field(..., description="Media title")
    description: Optional[str] = Field(None, description="Free-form description")
    owner_id: Optional[str] = Field(None, description="Owner of the media")
    file_path: Optional[str] = Field(None, description="Stored file path, relative to the media root")
    external_url: Optional[str] = Field(None, description="Externally hosted location")
    size_bytes: Optional[int] = Field(None, description="Recorded size in bytes")
    views: int = Field(..., description="View count")
    visibility: str = Field(..., description="Visibility")
    created_at: datetime = Field(..., description="Creation timestamp")
    is_streamable: bool = Field(..., description="Whether the media can be streamed from this server")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "media_id": "3f0c1e9a6b2d4c8e9f7a1b2c3d4e5f60",
                "title": "Intro",
                "description": "Channel intro",
                "owner_id": "user-42",
                "file_path": "/uploads/1717171717171-123456789.mp4",
                "external_url": None,
                "size_bytes": 52428800,
                "views": 17,
                "visibility": "public",
                "created_at": "2025-08-04T14:30:22",
                "is_streamable": True,
            }
        }
    )


class MediaListResponse(BaseModel):
    """Media list response"""
    videos: List[MediaInfoResponse] = Field(..., description="List of media records")
    total_count: int = Field(..., description="Number of records returned")

    model_config = ConfigDict(json_schema_extra={"example": {"videos": [], "total_count": 0}})


class ViewResponse(BaseModel):
    """Response to an explicit view increment"""
    video: MediaInfoResponse = Field(..., description="Updated media record")


class StreamingInfoResponse(BaseModel):
    """Streaming information response"""
    media_id: str = Field(..., description="Media ID")
    file_size_bytes: int = Field(..., description="Total file size")
    content_type: str = Field(..., description="MIME content type")
    supports_range_requests: bool = Field(..., description="Whether range requests are supported")
    chunk_size_bytes: int = Field(..., description="Read chunk size used while streaming")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "media_id": "3f0c1e9a6b2d4c8e9f7a1b2c3d4e5f60",
                "file_size_bytes": 52428800,
                "content_type": "video/mp4",
                "supports_range_requests": True,
                "chunk_size_bytes": 65536,
            }
        }
    )
