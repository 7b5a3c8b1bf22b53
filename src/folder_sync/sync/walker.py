"""Recursive traversal of a source folder."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from ..utils.file_utils import FileHelper
from .archive_builder import ArchiveBuilder
from .exclusion import ExclusionMatcher
from .file_tracker import is_eligible, read_file_info

logger = logging.getLogger(__name__)


@dataclass
class SyncStats:
    """Counters of one traversal; merged by the caller."""
    files_processed: int = 0
    files_excluded: int = 0
    dirs_excluded: int = 0
    bytes_added: int = 0
    errors: List[str] = field(default_factory=list)

    def merge(self, other: "SyncStats") -> None:
        self.files_processed += other.files_processed
        self.files_excluded += other.files_excluded
        self.dirs_excluded += other.dirs_excluded
        self.bytes_added += other.bytes_added
        self.errors.extend(other.errors)


class TreeWalker:
    """Depth-first walk feeding changed files to an archive builder.

    In preview mode there is no builder: eligible files are only logged and
    counted.
    """

    def __init__(self, matcher: ExclusionMatcher, checkpoint: datetime,
                 builder: Optional[ArchiveBuilder] = None, preview: bool = False):
        """Initialize tree walker.

        Args:
            matcher: Exclusion rules of the pair
            checkpoint: Instant of the last completed sync
            builder: Archive builder receiving eligible files (None in preview)
            preview: Report only, never write
        """
        if builder is None and not preview:
            raise ValueError("An archive builder is required outside preview mode")

        self.matcher = matcher
        self.checkpoint = checkpoint
        self.builder = builder
        self.preview = preview
        self.stats = SyncStats()

    def _record_error(self, message: str) -> None:
        logger.error(message)
        self.stats.errors.append(message)

    def _list_dir(self, current_dir: Path) -> Tuple[List[Path], List[Path]]:
        files = []
        dirs = []
        for entry in sorted(current_dir.iterdir()):
            if entry.is_dir():
                dirs.append(entry)
            elif entry.is_file():
                files.append(entry)
        return files, dirs

    def _process_file(self, base_dir: Path, file_path: Path) -> bool:
        if self.matcher.excludes_file(file_path):
            self.stats.files_excluded += 1
            logger.info(f"Excluded '{file_path}' based on exclusion patterns.")
            return False

        try:
            file_info = read_file_info(file_path)
        except OSError as e:
            self._record_error(f"Cannot read '{file_path}': {e}")
            return False

        if not is_eligible(file_info, self.checkpoint):
            return False

        if self.preview:
            self.stats.files_processed += 1
            logger.info(f"[Preview] Would add '{file_path}' to zip")
            return True

        relative_path = FileHelper.get_relative_path(file_path, base_dir)
        if not self.builder.add_file(file_path, relative_path, file_info.size):
            self.stats.errors.append(f"Failed to add '{file_path}' to zip")
            return False

        self.stats.files_processed += 1
        self.stats.bytes_added += file_info.size
        return True

    def walk(self, base_dir: Path, current_dir: Optional[Path] = None) -> bool:
        """Walk ``current_dir`` (defaults to ``base_dir``) recursively.

        Args:
            base_dir: Root of the pair; archive member names are relative to it
            current_dir: Directory to process

        Returns:
            True if any eligible file was found below ``current_dir``
        """
        base_dir = Path(base_dir)
        current_dir = Path(current_dir) if current_dir is not None else base_dir

        try:
            files, dirs = self._list_dir(current_dir)
        except OSError as e:
            self._record_error(f"Cannot list directory '{current_dir}': {e}")
            return False

        any_selected = False
        for file_path in files:
            if self._process_file(base_dir, file_path):
                any_selected = True

        for sub_dir in dirs:
            if self.matcher.excludes_dir(sub_dir):
                self.stats.dirs_excluded += 1
                logger.info(f"Excluded directory '{sub_dir}' based on exclusion patterns.")
                continue

            any_selected = self.walk(base_dir, sub_dir) or any_selected

        return any_selected
