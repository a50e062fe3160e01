import json
from pathlib import Path

import pytest

from media_stream_system.core.config import Config
from media_stream_system.storage.manager import StorageManager


@pytest.fixture
def config(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({
        "storage": {
            "base_path": str(tmp_path / "storage"),
            "media_root": str(tmp_path / "storage" / "media"),
        },
        "streaming": {"content_type": "video/mp4", "chunk_size_bytes": 128},
        "accounting": {"enabled": True, "increment_timeout_seconds": 2.0, "shutdown_timeout_seconds": 2.0},
        "system": {"log_level": "DEBUG", "log_file": None, "enable_api": False},
    }))
    return Config(str(config_path))


@pytest.fixture
def storage_manager(config):
    return StorageManager(config)


@pytest.fixture
def store_media(config, storage_manager):
    """Write bytes under the media root and register them"""

    def _store(name: str, payload: bytes, **kwargs) -> str:
        upload_dir = Path(config.storage.media_root) / "uploads"
        upload_dir.mkdir(parents=True, exist_ok=True)
        (upload_dir / name).write_bytes(payload)
        return storage_manager.register_media(title=name, file_path=f"/uploads/{name}", **kwargs)

    return _store
