"""
Main Application Coordinator for the Media Stream System.

This module coordinates all system components and provides graceful startup/shutdown.
"""

import signal
import time
import logging
import sys
from typing import Optional
from datetime import datetime

from .core.config import Config
from .core.logging_config import setup_logging, get_error_tracker, get_performance_logger
from .storage.manager import StorageManager
from .video.integration import create_video_module
from .api.server import APIServer


class MediaStreamSystem:
    """Main application coordinator for the Media Stream System"""

    def __init__(self, config_file: Optional[str] = None):
        # Load configuration first (basic logging will be used initially)
        self.config = Config(config_file)

        setup_logging(log_level=self.config.system.log_level, log_file=self.config.system.log_file)
        self.logger = logging.getLogger(__name__)

        self.error_tracker = get_error_tracker("main_system")
        self.performance_logger = get_performance_logger("main_system")

        # Initialize system components
        self.storage_manager = StorageManager(self.config)
        self.video_module = create_video_module(self.config, self.storage_manager)
        self.api_server = APIServer(self.config, self.storage_manager, self.video_module)

        # System state
        self.running = False
        self.start_time: Optional[datetime] = None

        self._setup_signal_handlers()

        self.logger.info("Media Stream System initialized")

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown"""

        def signal_handler(signum, frame):
            self.logger.info(f"Received signal {signum}, initiating graceful shutdown...")
            self.running = False

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def start(self) -> bool:
        """Start the entire system"""
        if self.running:
            self.logger.warning("System is already running")
            return True

        self.logger.info("Starting Media Stream System...")
        self.performance_logger.start_timer("system_startup")
        self.start_time = datetime.now()

        try:
            self.logger.info("Verifying media storage...")
            integrity_report = self.storage_manager.verify_storage_integrity()
            missing = integrity_report.get("missing_files", [])
            if missing:
                self.error_tracker.log_warning(f"{len(missing)} media records have no bytes on disk", "storage_integrity")

            self.logger.info("Starting API server...")
            if not self.api_server.start():
                self.error_tracker.log_warning("API server not started", "api_startup")
                return False

            self.running = True

            startup_time = self.performance_logger.end_timer("system_startup")
            self.logger.info(f"Media Stream System started successfully in {startup_time:.2f}s")
            return True

        except Exception as e:
            self.error_tracker.log_error(e, "system_startup")
            self.stop()
            return False

    def stop(self) -> None:
        """Stop the entire system gracefully"""
        self.logger.info("Stopping Media Stream System...")
        self.running = False

        try:
            # Lifespan shutdown drains pending view increments
            self.api_server.stop()

            if self.start_time:
                uptime = (datetime.now() - self.start_time).total_seconds()
                self.logger.info(f"System uptime: {uptime:.1f} seconds")

            self.logger.info("Media Stream System stopped")

        except Exception as e:
            self.logger.error(f"Error during system shutdown: {e}")

    def run(self) -> None:
        """Run the system (blocking call)"""
        if not self.start():
            self.logger.error("Failed to start system")
            return

        try:
            self.logger.info("System running... Press Ctrl+C to stop")

            while self.running and self.api_server.is_running():
                time.sleep(1)

        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        except Exception as e:
            self.logger.error(f"Unexpected error in main loop: {e}")
        finally:
            self.stop()

    def get_system_status(self) -> dict:
        """Get comprehensive system status"""
        return {
            "running": self.running,
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "uptime_seconds": (datetime.now() - self.start_time).total_seconds() if self.start_time else 0,
            "components": {"api_server": self.api_server.get_server_info(), "video_module": self.video_module.get_module_status()},
            "errors": self.error_tracker.get_error_stats(),
        }

    def is_running(self) -> bool:
        """Check if system is running"""
        return self.running


def main():
    """Main entry point for the application"""
    import argparse

    parser = argparse.ArgumentParser(description="Media Stream System")
    parser.add_argument("--config", type=str, help="Path to configuration file", default="config.json")
    parser.add_argument("--log-level", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level", default=None)

    args = parser.parse_args()

    system = MediaStreamSystem(args.config)

    if args.log_level:
        logging.getLogger().setLevel(getattr(logging, args.log_level))

    try:
        system.run()
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
