"""
Folder Sync

Incremental folder synchronization into size-capped zip volumes. Files
changed since the last run are packaged per source folder and delivered to
a target folder.
"""

__version__ = "1.0.0"
__author__ = "Folder Sync Tool"
__description__ = "Incremental folder sync into size-capped zip archives"

from .config.settings import SyncSettings
from .sync.sync_manager import SyncManager

__all__ = ["SyncSettings", "SyncManager"]
