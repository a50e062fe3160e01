"""
Media Stream System - Core Module

Configuration management and logging setup shared by every component.
"""

from .config import Config
from .logging_config import setup_logging, get_error_tracker, get_performance_logger

__all__ = ["Config", "setup_logging", "get_error_tracker", "get_performance_logger"]
