"""
Partial Reader Implementations.

Positioned, chunked reads of a byte interval using aiofiles.
"""

import logging

import aiofiles

from ..domain.interfaces import PartialReader, ByteStream
from ..domain.models import BackingBytes, StreamRange
from ..domain.exceptions import ResourceUnavailable


class FileByteStream(ByteStream):
    """
    Lazy byte sequence over one interval of an open file.

    Bytes are read on demand, at most ``chunk_size`` at a time, and never past
    the end of the interval. The handle is closed when the interval is
    exhausted, when a read fails, or when ``aclose`` is called.
    """

    def __init__(self, handle, byte_range: StreamRange, chunk_size: int, source: str):
        self._handle = handle
        self.byte_range = byte_range
        self.chunk_size = chunk_size
        self.source = source
        self._remaining = byte_range.size
        self._closed = False
        self.logger = logging.getLogger(__name__)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def bytes_sent(self) -> int:
        return self.byte_range.size - self._remaining

    def __aiter__(self) -> "FileByteStream":
        return self

    async def __anext__(self) -> bytes:
        if self._remaining <= 0 or self._closed:
            await self.aclose()
            raise StopAsyncIteration

        try:
            chunk = await self._handle.read(min(self.chunk_size, self._remaining))
        except OSError as e:
            await self.aclose()
            raise ResourceUnavailable(f"Read failed on {self.source}: {e}") from e

        if not chunk:
            missing = self._remaining
            await self.aclose()
            raise ResourceUnavailable(f"{self.source} ended {missing} bytes before byte {self.byte_range.end}")

        self._remaining -= len(chunk)
        return chunk

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._handle.close()
        if self._remaining > 0:
            self.logger.debug(f"Closed {self.source} with {self._remaining} bytes unsent")


class FilePartialReader(PartialReader):
    """Partial reader for local files"""

    def __init__(self, chunk_size: int = 64 * 1024):
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size
        self.logger = logging.getLogger(__name__)

    async def open_interval(self, backing: BackingBytes, byte_range: StreamRange) -> FileByteStream:
        """Open the file and position it at the start of the interval"""
        handle = None
        try:
            handle = await aiofiles.open(backing.path, "rb")
            await handle.seek(byte_range.start)
        except OSError as e:
            if handle is not None:
                await handle.close()
            self.logger.error(f"Error opening {backing.path} for {backing.media_id}: {e}")
            raise ResourceUnavailable(f"Cannot open {backing.path}: {e}") from e

        return FileByteStream(handle, byte_range, self.chunk_size, source=str(backing.path))
