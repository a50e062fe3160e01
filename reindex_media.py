#!/usr/bin/env python3
"""
Media Reindexing Script for the Media Stream System

Registers media files found under the media root that have no record in the
media index yet, so they can be streamed through the API.

Usage:
    python reindex_media.py [--dry-run] [--config CONFIG]
"""

import sys
import argparse
import logging
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from media_stream_system.core.config import Config
from media_stream_system.storage.manager import StorageManager


def main():
    """Main function"""
    parser = argparse.ArgumentParser(description="Register unindexed media files")
    parser.add_argument("--dry-run", action="store_true",
                       help="Show what would be done without making changes")
    parser.add_argument("--config", type=str, default="config.json",
                       help="Path to configuration file")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                       default="INFO", help="Set logging level")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger(__name__)

    try:
        config = Config(args.config)
        storage_manager = StorageManager(config)
        logger.info(f"Scanning {config.storage.media_root}")

        registered = storage_manager.reindex_media_root(dry_run=args.dry_run)

        for relative_path in registered:
            logger.info(f"  {'Would register' if args.dry_run else 'Registered'}: {relative_path}")

        logger.info(f"Reindexing complete: {len(registered)} files {'would be ' if args.dry_run else ''}registered")

    except Exception as e:
        logger.error(f"Error during reindexing: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
