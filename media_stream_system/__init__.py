"""
Media Stream System

Serves stored media over HTTP with byte-range support so players can seek
without downloading whole files, and keeps per-media view counts.
"""

__version__ = "1.0.0"
__author__ = "Media Stream Team"

from .main import MediaStreamSystem

__all__ = ["MediaStreamSystem"]
