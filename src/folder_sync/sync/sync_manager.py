"""Sync manager orchestrating walk, packaging, delivery and checkpointing."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..config.settings import SyncPair, SyncSettings
from ..utils.logging import TimedOperation
from .archive_builder import ArchiveBuilder, ArchiveVolume
from .checkpoint import CheckpointStore
from .delivery import cleanup, deliver
from .exclusion import ExclusionMatcher
from .walker import SyncStats, TreeWalker

# Module logger
logger = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_NOTHING_TO_DO = "nothing_to_do"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass
class PairResult:
    """Outcome of syncing one pair."""
    pair: SyncPair
    status: str = STATUS_COMPLETED
    any_selected: bool = False
    volumes: List[ArchiveVolume] = field(default_factory=list)
    delivered: List[Path] = field(default_factory=list)
    stats: SyncStats = field(default_factory=SyncStats)
    duration: float = 0.0


@dataclass
class RunSummary:
    """Totals over every pair of a run."""
    total_pairs: int = 0
    synced_pairs: int = 0
    unchanged_pairs: int = 0
    skipped_pairs: int = 0
    failed_pairs: int = 0
    files_processed: int = 0
    files_excluded: int = 0
    dirs_excluded: int = 0
    bytes_added: int = 0
    volumes_delivered: int = 0
    total_errors: int = 0


class SyncManager:
    """Runs incremental syncs for a list of pairs."""

    def __init__(self, settings: SyncSettings, preview: bool = False):
        """Initialize sync manager.

        Args:
            settings: Sync settings
            preview: Report what would be synced without writing anything
        """
        self.settings = settings
        self.preview = preview
        self.checkpoint_store = CheckpointStore(settings.checkpoint_file)

    def reset_checkpoint(self) -> None:
        self.checkpoint_store.reset()

    def last_sync_time(self) -> Optional[datetime]:
        return self.checkpoint_store.last_sync_time()

    def _new_builder(self, pair: SyncPair) -> ArchiveBuilder:
        return ArchiveBuilder(
            base_dir=pair.source_path,
            temp_dir=self.settings.temp_dir,
            max_volume_size=self.settings.max_volume_size,
        )

    def sync_pair(self, pair: SyncPair, checkpoint: datetime, timestamp: str) -> PairResult:
        """Sync a single pair.

        Args:
            pair: Pair to sync
            checkpoint: Instant of the last completed sync
            timestamp: Formatted run timestamp used in delivered file names

        Returns:
            PairResult for the pair
        """
        result = PairResult(pair=pair)
        source = pair.source_path
        target = pair.target_path

        if not source.is_dir():
            message = f"Source folder '{source}' does not exist."
            logger.error(message)
            result.status = STATUS_SKIPPED
            result.stats.errors.append(message)
            return result

        if not target.exists():
            if self.preview:
                logger.info(f"[Preview] Would create target folder '{target}'")
            else:
                target.mkdir(parents=True, exist_ok=True)
                logger.info(f"Created target folder '{target}'")

        matcher = ExclusionMatcher.for_pair(pair)

        with TimedOperation(logger, f"sync of '{source}' -> '{target}'") as timer:
            if self.preview:
                walker = TreeWalker(matcher, checkpoint, preview=True)
                result.any_selected = walker.walk(source)
            else:
                builder = self._new_builder(pair)
                try:
                    with builder:
                        walker = TreeWalker(matcher, checkpoint, builder=builder)
                        result.any_selected = walker.walk(source)
                    result.volumes = builder.volumes

                    if result.any_selected:
                        result.delivered = deliver(result.volumes, target, pair.source_name, timestamp)
                finally:
                    # Temp volumes never outlive the pair, whatever happened above
                    cleanup(builder.volumes)

        result.stats = walker.stats
        result.duration = timer.duration
        if not result.any_selected:
            result.status = STATUS_NOTHING_TO_DO
            logger.info(f"Nothing to do for '{source}'")
        return result

    def run_all(self, pairs: List[SyncPair]) -> List[PairResult]:
        """Sync every pair in order, then advance the checkpoint.

        The checkpoint is read once before the first pair and written once
        after the last one, never in preview mode.

        Args:
            pairs: Pairs to sync

        Returns:
            One PairResult per pair
        """
        checkpoint = self.checkpoint_store.get()
        timestamp = datetime.now().strftime(self.settings.timestamp_format)
        logger.info(f"Running {len(pairs)} sync pairs"
                    f"{' in preview mode' if self.preview else ''}")

        results = []
        for pair in pairs:
            try:
                results.append(self.sync_pair(pair, checkpoint, timestamp))
            except Exception as e:
                logger.error(f"Sync of '{pair.source_path}' failed: {e}")
                failed = PairResult(pair=pair, status=STATUS_FAILED)
                failed.stats.errors.append(str(e))
                results.append(failed)

        if not self.preview:
            self.checkpoint_store.set(datetime.now())

        return results

    def get_sync_summary(self, results: List[PairResult]) -> RunSummary:
        """Generate summary of sync results.

        Args:
            results: List of pair results

        Returns:
            RunSummary
        """
        totals = SyncStats()
        for result in results:
            totals.merge(result.stats)

        return RunSummary(
            total_pairs=len(results),
            synced_pairs=len([r for r in results if r.status == STATUS_COMPLETED]),
            unchanged_pairs=len([r for r in results if r.status == STATUS_NOTHING_TO_DO]),
            skipped_pairs=len([r for r in results if r.status == STATUS_SKIPPED]),
            failed_pairs=len([r for r in results if r.status == STATUS_FAILED]),
            files_processed=totals.files_processed,
            files_excluded=totals.files_excluded,
            dirs_excluded=totals.dirs_excluded,
            bytes_added=totals.bytes_added,
            volumes_delivered=sum(len(r.delivered) for r in results),
            total_errors=len(totals.errors),
        )
