"""
Video Module Integration.

Wires the streaming core to the storage manager and exposes its routes.
This module handles dependency injection and service composition.
"""

import logging
from typing import Optional

from ..core.config import Config
from ..storage.manager import StorageManager

# Domain interfaces
from .domain.interfaces import MediaRepository, PartialReader, ViewCounter

# Infrastructure implementations
from .infrastructure.repositories import FileSystemMediaRepository
from .infrastructure.readers import FilePartialReader
from .infrastructure.counters import StorageViewCounter

# Application services
from .application.video_service import VideoService
from .application.streaming_service import StreamingService
from .application.view_accounting import ViewAccountant

# Presentation layer
from .presentation.controllers import VideoController, StreamingController
from .presentation.routes import create_video_routes


class VideoModule:
    """
    Main video module that provides dependency injection and service composition.

    This class follows the composition root pattern, creating and wiring up
    all dependencies for the streaming functionality.
    """

    def __init__(
        self,
        config: Config,
        storage_manager: StorageManager,
        view_counter: Optional[ViewCounter] = None
    ):
        self.config = config
        self.storage_manager = storage_manager
        self.logger = logging.getLogger(__name__)

        self._initialize_services(view_counter)

        self.logger.info("Video module initialized successfully")

    def _initialize_services(self, view_counter: Optional[ViewCounter]):
        """Initialize all services with proper dependency injection"""

        # Infrastructure layer
        self.media_repository = self._create_media_repository()
        self.partial_reader = self._create_partial_reader()
        self.view_counter = view_counter or self._create_view_counter()

        # Application layer
        self.video_service = VideoService(
            media_repository=self.media_repository,
            view_counter=self.view_counter
        )

        self.streaming_service = StreamingService(
            media_repository=self.media_repository,
            partial_reader=self.partial_reader,
            content_type=self.config.streaming.content_type,
            chunk_size_bytes=self.config.streaming.chunk_size_bytes
        )

        self.view_accountant = ViewAccountant(
            view_counter=self.view_counter,
            increment_timeout_seconds=self.config.accounting.increment_timeout_seconds,
            enabled=self.config.accounting.enabled
        )

        # Presentation layer
        self.video_controller = VideoController(self.video_service)
        self.streaming_controller = StreamingController(
            streaming_service=self.streaming_service,
            view_accountant=self.view_accountant
        )

    def _create_media_repository(self) -> MediaRepository:
        return FileSystemMediaRepository(storage_manager=self.storage_manager)

    def _create_partial_reader(self) -> PartialReader:
        return FilePartialReader(chunk_size=self.config.streaming.chunk_size_bytes)

    def _create_view_counter(self) -> ViewCounter:
        return StorageViewCounter(storage_manager=self.storage_manager)

    def get_api_routes(self):
        """Get FastAPI routes for media functionality"""
        return create_video_routes(
            video_controller=self.video_controller,
            streaming_controller=self.streaming_controller
        )

    async def cleanup(self) -> int:
        """Wait for in-flight view increments; returns how many were dropped"""
        dropped = await self.view_accountant.drain(timeout=self.config.accounting.shutdown_timeout_seconds)
        if dropped:
            self.logger.warning(f"Video module cleanup dropped {dropped} view increments")
        else:
            self.logger.info("Video module cleanup completed")
        return dropped

    def get_module_status(self) -> dict:
        """Get status information about the video module"""
        return {
            "media_repository": type(self.media_repository).__name__,
            "partial_reader": type(self.partial_reader).__name__,
            "view_counter": type(self.view_counter).__name__,
            "accounting_enabled": self.view_accountant.enabled,
            "pending_view_increments": self.view_accountant.pending_count,
            "content_type": self.streaming_service.content_type,
            "chunk_size_bytes": self.streaming_service.chunk_size_bytes
        }


def create_video_module(config: Config, storage_manager: StorageManager) -> VideoModule:
    """
    Factory function to create a configured video module.

    This is the main entry point for mounting streaming into the API server.
    """
    return VideoModule(config=config, storage_manager=storage_manager)
