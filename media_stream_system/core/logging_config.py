"""
Logging configuration for the Media Stream System.

Console output is coloured by level, file output rotates, and streaming
components get their own log levels so request-path noise can be tuned
separately from the rest of the application.
"""

import logging
import logging.handlers
import os
import sys
import time
from typing import Dict, Optional
from datetime import datetime


# Logger name -> level used when the root level is not DEBUG
COMPONENT_LEVELS = {
    "media_stream_system.video": logging.INFO,
    "media_stream_system.storage": logging.INFO,
    "uvicorn": logging.WARNING,
    "fastapi": logging.WARNING,
}

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        # Work on a copy so file handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname)
        if color:
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Install console and rotating file handlers on the root logger"""
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"))
            root_logger.addHandler(file_handler)

        except OSError as e:
            print(f"Warning: Could not setup file logging: {e}")

    # DEBUG opens up the request path; uvicorn access logs stay at INFO even then
    for name, component_level in COMPONENT_LEVELS.items():
        if level == logging.DEBUG:
            component_level = logging.INFO if name == "uvicorn" else logging.DEBUG
        logging.getLogger(name).setLevel(component_level)

    sys.excepthook = _log_uncaught_exception

    logging.getLogger(__name__).info(f"Logging initialized - Level: {log_level.upper()}, File: {log_file}")


def _log_uncaught_exception(exc_type, exc_value, exc_traceback) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return

    logging.getLogger("uncaught_exception").critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))


class PerformanceLogger:
    """Times named operations of one component"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(f"performance.{name}")
        self._started: Dict[str, float] = {}

    def start_timer(self, operation: str) -> None:
        self._started[operation] = time.monotonic()
        self.logger.debug(f"Started: {operation}")

    def end_timer(self, operation: str) -> float:
        """Log and return the seconds since start_timer(operation)"""
        started = self._started.pop(operation, None)
        if started is None:
            self.logger.warning(f"Timer not started for: {operation}")
            return 0.0

        duration = time.monotonic() - started
        self.logger.info(f"Completed: {operation} in {duration:.3f}s")
        return duration


class ErrorTracker:
    """Counts and logs the errors of one component"""

    def __init__(self, component_name: str):
        self.component_name = component_name
        self.logger = logging.getLogger(f"errors.{component_name}")
        self.error_count = 0
        self.last_error_time: Optional[datetime] = None

    def log_error(self, error: Exception, context: str = "", additional_data: Optional[dict] = None) -> None:
        self.error_count += 1
        self.last_error_time = datetime.now()

        error_msg = f"Error in {self._where(context)}: {error!r}"
        if additional_data:
            error_msg += f" | Data: {additional_data}"

        self.logger.error(error_msg, exc_info=error)

    def log_warning(self, message: str, context: str = "") -> None:
        self.logger.warning(f"Warning in {self._where(context)}: {message}")

    def get_error_stats(self) -> dict:
        return {
            "component": self.component_name,
            "error_count": self.error_count,
            "last_error_time": self.last_error_time.isoformat() if self.last_error_time else None,
        }

    def _where(self, context: str) -> str:
        return f"{self.component_name} ({context})" if context else self.component_name


def get_performance_logger(component_name: str) -> PerformanceLogger:
    """Get a performance logger for a component"""
    return PerformanceLogger(component_name)


def get_error_tracker(component_name: str) -> ErrorTracker:
    """Get an error tracker for a component"""
    return ErrorTracker(component_name)
