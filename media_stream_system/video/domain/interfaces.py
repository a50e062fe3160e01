"""
Video Domain Interfaces.

Abstract interfaces that define contracts for media streaming.
These interfaces allow dependency inversion - domain logic doesn't depend on infrastructure.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Optional

from .models import MediaRecord, BackingBytes, StreamRange


class MediaRepository(ABC):
    """Abstract repository for media records and their bytes"""

    @abstractmethod
    async def get_by_id(self, media_id: str) -> Optional[MediaRecord]:
        """Get media record by ID"""
        pass

    @abstractmethod
    async def list_public(self, owner_id: Optional[str] = None, limit: Optional[int] = 100) -> List[MediaRecord]:
        """List public media records, newest first"""
        pass

    @abstractmethod
    async def resolve_backing_bytes(self, record: MediaRecord) -> BackingBytes:
        """
        Locate the bytes of a record.

        Raises MediaGone when the record has no local bytes and
        ResourceUnavailable when they cannot be inspected.
        """
        pass


class ByteStream(ABC):
    """Async byte sequence bound to an open handle"""

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[bytes]:
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release the underlying handle"""
        pass

    async def __aenter__(self) -> "ByteStream":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


class PartialReader(ABC):
    """Abstract reader of byte intervals"""

    @abstractmethod
    async def open_interval(self, backing: BackingBytes, byte_range: StreamRange) -> ByteStream:
        """Open a lazy stream of exactly byte_range.size bytes"""
        pass


class ViewCounter(ABC):
    """Abstract durable view counter"""

    @abstractmethod
    async def increment(self, media_id: str) -> Optional[int]:
        """Atomically add one view; returns the new count if known"""
        pass
