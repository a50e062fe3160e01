"""
Media Repository Implementations.

File system-based implementation of the media repository interface, backed
by the storage manager's media index.
"""

import logging
import stat
from datetime import datetime
from typing import List, Optional

import aiofiles.os

from ..domain.interfaces import MediaRepository
from ..domain.models import MediaRecord, MediaVisibility, BackingBytes
from ..domain.exceptions import MediaGone, ResourceUnavailable
from ...storage.manager import StorageManager


class FileSystemMediaRepository(MediaRepository):
    """File system implementation of media repository"""

    def __init__(self, storage_manager: StorageManager):
        self.storage_manager = storage_manager
        self.logger = logging.getLogger(__name__)

    async def get_by_id(self, media_id: str) -> Optional[MediaRecord]:
        """Get media record by ID"""
        try:
            media_info = self.storage_manager.get_media(media_id)
            if not media_info:
                return None

            return self._convert_to_media_record(media_info)

        except Exception as e:
            self.logger.error(f"Error getting media by ID {media_id}: {e}")
            return None

    async def list_public(self, owner_id: Optional[str] = None, limit: Optional[int] = 100) -> List[MediaRecord]:
        """List public media records, newest first"""
        records = self.storage_manager.list_media(owner_id=owner_id, limit=limit)
        return [self._convert_to_media_record(media_info) for media_info in records]

    async def resolve_backing_bytes(self, record: MediaRecord) -> BackingBytes:
        """Locate a record's local file and determine its length"""
        if not record.has_local_bytes:
            raise MediaGone(record.media_id, "no local file for this media")

        path = self.storage_manager.resolve_local_path(record.file_path)

        try:
            file_stat = await aiofiles.os.stat(path)
        except FileNotFoundError:
            raise MediaGone(record.media_id)
        except OSError as e:
            raise ResourceUnavailable(f"Cannot inspect {path}: {e}") from e

        if not stat.S_ISREG(file_stat.st_mode):
            raise MediaGone(record.media_id, f"{path} is not a regular file")

        total_length = file_stat.st_size
        if record.size_bytes is not None:
            if file_stat.st_size < record.size_bytes:
                raise ResourceUnavailable(f"{path} holds {file_stat.st_size} of {record.size_bytes} recorded bytes")
            total_length = record.size_bytes

        return BackingBytes(media_id=record.media_id, path=path, total_length=total_length)

    def _convert_to_media_record(self, media_info: dict) -> MediaRecord:
        """Convert a media index entry to a MediaRecord domain model"""
        created_at = datetime.now()
        if media_info.get("created_at"):
            created_at = datetime.fromisoformat(media_info["created_at"])

        try:
            visibility = MediaVisibility(media_info.get("visibility", "public"))
        except ValueError:
            visibility = MediaVisibility.PUBLIC

        return MediaRecord(
            media_id=media_info["media_id"],
            title=media_info.get("title", ""),
            created_at=created_at,
            file_path=media_info.get("file_path"),
            external_url=media_info.get("external_url"),
            size_bytes=media_info.get("size_bytes"),
            views=int(media_info.get("views", 0)),
            owner_id=media_info.get("owner_id"),
            description=media_info.get("description"),
            visibility=visibility,
        )
