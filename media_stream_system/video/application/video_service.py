"""
Video Application Service.

Catalog use cases around the stream: record lookup, listings and the
explicit view increment used by players of externally hosted media.
"""

import logging
from typing import List, Optional

from ..domain.interfaces import MediaRepository, ViewCounter
from ..domain.models import MediaRecord
from ..domain.exceptions import MediaNotFound


class VideoService:
    """Application service for the media catalog"""

    def __init__(self, media_repository: MediaRepository, view_counter: ViewCounter):
        self.media_repository = media_repository
        self.view_counter = view_counter
        self.logger = logging.getLogger(__name__)

    async def get_video_by_id(self, media_id: str) -> Optional[MediaRecord]:
        """Get media record by ID"""
        try:
            return await self.media_repository.get_by_id(media_id)

        except Exception as e:
            self.logger.error(f"Error getting video {media_id}: {e}")
            return None

    async def list_videos(self, limit: Optional[int] = 100) -> List[MediaRecord]:
        """List public videos, newest first"""
        try:
            return await self.media_repository.list_public(limit=limit)

        except Exception as e:
            self.logger.error(f"Error listing videos: {e}")
            return []

    async def list_videos_by_owner(self, owner_id: str, limit: Optional[int] = None) -> List[MediaRecord]:
        """List public videos of one owner, newest first"""
        try:
            return await self.media_repository.list_public(owner_id=owner_id, limit=limit)

        except Exception as e:
            self.logger.error(f"Error listing videos for owner {owner_id}: {e}")
            return []

    async def register_view(self, media_id: str) -> MediaRecord:
        """
        Count a view synchronously and return the updated record.

        Used for media played from an external URL, where no stream request
        reaches this server.

        Raises:
            MediaNotFound: no record exists for media_id.
        """
        views = await self.view_counter.increment(media_id)
        if views is None:
            raise MediaNotFound(media_id)

        self.logger.info(f"Registered view for {media_id} (views={views})")
        record = await self.media_repository.get_by_id(media_id)
        if record is None:
            raise MediaNotFound(media_id)
        return record
