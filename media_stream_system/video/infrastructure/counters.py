"""
View Counter Implementations.

Delegates increments to the storage manager, which applies them atomically.
"""

import asyncio
import logging
from typing import Optional

from ..domain.interfaces import ViewCounter
from ...storage.manager import StorageManager


class StorageViewCounter(ViewCounter):
    """View counter backed by the media index"""

    def __init__(self, storage_manager: StorageManager):
        self.storage_manager = storage_manager
        self.logger = logging.getLogger(__name__)

    async def increment(self, media_id: str) -> Optional[int]:
        # The index write does file I/O; keep it off the event loop
        return await asyncio.to_thread(self.storage_manager.increment_views, media_id)
