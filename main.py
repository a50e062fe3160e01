#!/usr/bin/env python3
"""
Main entry point for the Media Stream System.

This script loads the configuration, checks the media index and serves the
streaming API until interrupted.
"""

import sys
import os

# Add the current directory to Python path to import our modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from media_stream_system.main import main

if __name__ == "__main__":
    main()
