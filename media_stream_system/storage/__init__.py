"""
Storage module for the Media Stream System.

Holds the media index and performs atomic view-count updates.
"""

from .manager import StorageManager

__all__ = ["StorageManager"]
