#!/usr/bin/env python3
"""
Radio Wave to Spotify Playlist Sync

Usage:
    python sync.py 2024-09-01

Creates a new private playlist "Radio Wave 2024-09-01" on every run.
"""

from radiowave_sync.sync_service import main


if __name__ == '__main__':
    main()
