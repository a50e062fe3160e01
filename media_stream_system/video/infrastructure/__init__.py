"""
Video Infrastructure Layer.

Contains implementations of domain interfaces using external dependencies
like the file system, aiofiles and the media index.
"""

from .repositories import FileSystemMediaRepository
from .readers import FilePartialReader, FileByteStream
from .counters import StorageViewCounter

__all__ = [
    "FileSystemMediaRepository",
    "FilePartialReader",
    "FileByteStream",
    "StorageViewCounter",
]
