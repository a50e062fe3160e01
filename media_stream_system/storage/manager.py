"""
Storage Manager for the Media Stream System.

This module owns the media index: the JSON document holding one record per
media item. It is the metadata store behind the streaming core and the only
place where view counters are mutated.
"""

import os
import json
import logging
import threading
import uuid
from typing import Dict, List, Optional, Any
from datetime import datetime
from pathlib import Path

from ..core.config import Config


class StorageManager:
    """Manages the media index and local media files"""

    def __init__(self, config: Config):
        self.config = config
        self.storage_config = config.storage
        self.logger = logging.getLogger(__name__)

        # Guards every read-modify-write of the index
        self._lock = threading.RLock()

        self._ensure_storage_structure()

        self.index_path = str(config.index_path)
        self.media_index = self._load_media_index()

    def _ensure_storage_structure(self) -> None:
        """Ensure storage directory structure exists"""
        try:
            Path(self.storage_config.base_path).mkdir(parents=True, exist_ok=True)
            Path(self.storage_config.media_root).mkdir(parents=True, exist_ok=True)
            self.logger.debug(f"Ensured media root: {self.storage_config.media_root}")
        except Exception as e:
            self.logger.error(f"Error creating storage structure: {e}")
            raise

    def _load_media_index(self) -> Dict[str, Any]:
        """Load media index from disk"""
        try:
            if os.path.exists(self.index_path):
                with open(self.index_path, "r") as f:
                    return json.load(f)
            else:
                return {"media": {}, "last_updated": None}
        except Exception as e:
            self.logger.error(f"Error loading media index: {e}")
            return {"media": {}, "last_updated": None}

    def _save_media_index(self) -> None:
        """Save media index to disk"""
        self.media_index["last_updated"] = datetime.now().isoformat()
        tmp_path = f"{self.index_path}.tmp"
        with open(tmp_path, "w") as f:
            json.dump(self.media_index, f, indent=2)
        os.replace(tmp_path, self.index_path)

    def resolve_local_path(self, file_path: str) -> Path:
        """Map a record's file path onto the filesystem"""
        path = Path(file_path)
        if path.is_absolute() and path.exists():
            return path
        # Records store upload-style paths such as "/uploads/clip.mp4"
        return Path(self.storage_config.media_root) / file_path.lstrip("/\\")

    def register_media(
        self,
        title: str,
        file_path: Optional[str] = None,
        external_url: Optional[str] = None,
        owner_id: Optional[str] = None,
        description: Optional[str] = None,
        size_bytes: Optional[int] = None,
    ) -> str:
        """Register a media record and return its ID"""
        if not title:
            raise ValueError("Title is required")
        if not file_path and not external_url:
            raise ValueError("Either file_path or external_url is required")

        if file_path and size_bytes is None:
            local_path = self.resolve_local_path(file_path)
            if local_path.exists():
                size_bytes = local_path.stat().st_size

        media_id = uuid.uuid4().hex
        media_info = {
            "media_id": media_id,
            "title": title,
            "description": description,
            "owner_id": owner_id,
            "file_path": file_path,
            "external_url": external_url,
            "size_bytes": size_bytes,
            "views": 0,
            "visibility": "public",
            "created_at": datetime.now().isoformat(),
        }

        with self._lock:
            self.media_index["media"][media_id] = media_info
            self._save_media_index()

        self.logger.info(f"Registered media: {media_id} ({title})")
        return media_id

    def get_media(self, media_id: str) -> Optional[Dict[str, Any]]:
        """Get a copy of a media record"""
        with self._lock:
            media_info = self.media_index["media"].get(media_id)
            return dict(media_info) if media_info else None

    def list_media(self, owner_id: Optional[str] = None, limit: Optional[int] = 100) -> List[Dict[str, Any]]:
        """List public media records, newest first"""
        try:
            with self._lock:
                records = [dict(info) for info in self.media_index["media"].values()]

            records = [r for r in records if r.get("visibility", "public") == "public"]
            if owner_id:
                records = [r for r in records if r.get("owner_id") == owner_id]

            records.sort(key=lambda r: r["created_at"], reverse=True)

            if limit:
                records = records[:limit]

            return records

        except Exception as e:
            self.logger.error(f"Error listing media: {e}")
            return []

    def increment_views(self, media_id: str) -> Optional[int]:
        """
        Atomically increment the view counter of a record.

        The read, increment and persist happen under one lock, so concurrent
        callers never overwrite each other's increments.

        Returns:
            The new view count, or None if the record does not exist.
        """
        with self._lock:
            media_info = self.media_index["media"].get(media_id)
            if media_info is None:
                return None

            media_info["views"] = int(media_info.get("views", 0)) + 1
            self._save_media_index()
            return media_info["views"]

    def reindex_media_root(self, dry_run: bool = False) -> List[str]:
        """Register files under the media root that have no record yet"""
        media_root = Path(self.storage_config.media_root)
        extensions = {ext.lower() for ext in self.storage_config.media_extensions}

        with self._lock:
            indexed = {
                str(self.resolve_local_path(info["file_path"]).resolve())
                for info in self.media_index["media"].values()
                if info.get("file_path")
            }

        registered = []
        for media_file in sorted(media_root.rglob("*")):
            if not media_file.is_file() or media_file.suffix.lower() not in extensions:
                continue
            if str(media_file.resolve()) in indexed:
                continue

            relative_path = "/" + media_file.relative_to(media_root).as_posix()
            if dry_run:
                self.logger.info(f"Would register: {relative_path}")
                registered.append(relative_path)
                continue

            self.register_media(title=media_file.stem, file_path=relative_path, size_bytes=media_file.stat().st_size)
            registered.append(relative_path)

        self.logger.info(f"Reindex completed: {len(registered)} new files (dry_run={dry_run})")
        return registered

    def verify_storage_integrity(self) -> Dict[str, Any]:
        """
        Report records whose local bytes are missing.

        Missing files are reported, not removed: streaming answers them as
        gone rather than not found, so the record has to survive.
        """
        integrity_report = {"total_media_in_index": 0, "missing_files": [], "size_mismatches": []}

        try:
            with self._lock:
                records = list(self.media_index["media"].values())

            integrity_report["total_media_in_index"] = len(records)

            for media_info in records:
                file_path = media_info.get("file_path")
                if not file_path:
                    continue

                local_path = self.resolve_local_path(file_path)
                if not local_path.exists():
                    integrity_report["missing_files"].append(media_info["media_id"])
                    continue

                recorded_size = media_info.get("size_bytes")
                if recorded_size is not None and local_path.stat().st_size != recorded_size:
                    integrity_report["size_mismatches"].append(media_info["media_id"])

            self.logger.info(
                f"Storage integrity check completed: {len(integrity_report['missing_files'])} missing, "
                f"{len(integrity_report['size_mismatches'])} size mismatches"
            )
            return integrity_report

        except Exception as e:
            self.logger.error(f"Error during integrity check: {e}")
            integrity_report["error"] = str(e)
            return integrity_report
