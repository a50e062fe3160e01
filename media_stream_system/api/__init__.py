"""
API server for the Media Stream System.
"""

from .server import APIServer

__all__ = ["APIServer"]
