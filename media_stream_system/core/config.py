"""
Configuration management for the Media Stream System.

This module handles all configuration settings including storage paths,
streaming parameters, view accounting and API server settings.
"""

import json
import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, asdict, field
from pathlib import Path


@dataclass
class StorageConfig:
    """Storage configuration"""

    base_path: str = "storage"
    media_root: str = "storage/media"  # Local file paths in records are relative to this
    index_file: str = "media_index.json"  # Stored under base_path
    media_extensions: List[str] = field(default_factory=lambda: [".mp4", ".m4v", ".webm", ".mov"])


@dataclass
class StreamingConfig:
    """Streaming configuration"""

    content_type: str = "video/mp4"  # Fixed MIME type for locally stored files
    chunk_size_bytes: int = 64 * 1024


@dataclass
class AccountingConfig:
    """View accounting configuration"""

    enabled: bool = True
    increment_timeout_seconds: float = 5.0
    shutdown_timeout_seconds: float = 10.0  # How long shutdown waits for in-flight increments


@dataclass
class SystemConfig:
    """System-wide configuration"""

    log_level: str = "INFO"
    log_file: Optional[str] = "media_stream_system.log"
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    enable_api: bool = True
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


class Config:
    """Main configuration manager"""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or "config.json"
        self.logger = logging.getLogger(__name__)

        # Default configurations
        self.storage = StorageConfig()
        self.streaming = StreamingConfig()
        self.accounting = AccountingConfig()
        self.system = SystemConfig()

        # Load configuration
        self.load_config()

        # Ensure storage directories exist
        self._ensure_storage_directories()

    def load_config(self) -> None:
        """Load configuration from file"""
        config_path = Path(self.config_file)

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    config_data = json.load(f)

                if "storage" in config_data:
                    self.storage = StorageConfig(**config_data["storage"])

                if "streaming" in config_data:
                    self.streaming = StreamingConfig(**config_data["streaming"])

                if "accounting" in config_data:
                    self.accounting = AccountingConfig(**config_data["accounting"])

                if "system" in config_data:
                    self.system = SystemConfig(**config_data["system"])

                self.logger.info(f"Configuration loaded from {config_path}")

            except Exception as e:
                self.logger.error(f"Error loading config from {config_path}: {e}")
        else:
            self.logger.info(f"Config file {config_path} not found, using defaults")
            self.save_config()  # Save default config

    def save_config(self) -> None:
        """Save current configuration to file"""
        try:
            with open(self.config_file, "w") as f:
                json.dump(self.to_dict(), f, indent=2)
            self.logger.info(f"Configuration saved to {self.config_file}")
        except Exception as e:
            self.logger.error(f"Error saving config to {self.config_file}: {e}")

    def _ensure_storage_directories(self) -> None:
        """Ensure all storage directories exist"""
        try:
            Path(self.storage.base_path).mkdir(parents=True, exist_ok=True)
            Path(self.storage.media_root).mkdir(parents=True, exist_ok=True)
            self.logger.info("Storage directories verified/created")
        except Exception as e:
            self.logger.error(f"Error creating storage directories: {e}")

    @property
    def index_path(self) -> Path:
        """Location of the media index file"""
        return Path(self.storage.base_path) / self.storage.index_file

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {"storage": asdict(self.storage), "streaming": asdict(self.streaming), "accounting": asdict(self.accounting), "system": asdict(self.system)}
