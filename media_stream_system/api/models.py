"""
Data models for the Media Stream System API.

This module defines Pydantic models for application-level responses.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Generic success response"""

    success: bool = True
    message: str
    data: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    timestamp: str


class SystemStatusResponse(BaseModel):
    """System status response model"""

    running: bool
    uptime_seconds: float
    media_count: int
    video_module: Dict[str, Any]
