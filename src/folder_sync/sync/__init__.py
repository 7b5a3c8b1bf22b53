"""Sync engine for incremental folder synchronization."""

from .archive_builder import ArchiveBuilder, ArchiveVolume
from .checkpoint import CheckpointStore
from .exclusion import ExclusionMatcher
from .sync_manager import PairResult, RunSummary, SyncManager
from .walker import SyncStats, TreeWalker

__all__ = [
    "ArchiveBuilder",
    "ArchiveVolume",
    "CheckpointStore",
    "ExclusionMatcher",
    "PairResult",
    "RunSummary",
    "SyncManager",
    "SyncStats",
    "TreeWalker",
]
