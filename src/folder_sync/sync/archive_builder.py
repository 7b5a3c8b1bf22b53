"""Size-capped, multi-volume zip archive construction."""

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..config.settings import DEFAULT_MAX_VOLUME_SIZE
from ..utils.file_utils import FileHelper

logger = logging.getLogger(__name__)


@dataclass
class ArchiveVolume:
    """One zip volume created while packaging a pair."""
    path: Path
    sequence_index: int
    accumulated_size: int = 0
    file_count: int = 0


class ArchiveBuilder:
    """Builds one or more zip volumes for a single source folder.

    The cap bounds the uncompressed bytes added to a volume. It is checked
    after each file, so one file may push a volume past the cap; the next
    file then goes to a fresh volume. Files are never split.

    Volume 1 is opened eagerly by :meth:`start` so it exists even when no
    file gets added. Use the builder as a context manager to guarantee the
    open volume is closed on every exit path::

        with ArchiveBuilder(source_dir, temp_dir) as builder:
            builder.add_file(path, "a/b.txt", size)
        volumes = builder.volumes
    """

    def __init__(self, base_dir: Path, temp_dir: Path,
                 max_volume_size: int = DEFAULT_MAX_VOLUME_SIZE,
                 compression: int = zipfile.ZIP_DEFLATED):
        """Initialize archive builder.

        Args:
            base_dir: Source folder the volumes are named after
            temp_dir: Directory for the temporary volume files
            max_volume_size: Cap on uncompressed bytes per volume
            compression: zipfile compression method
        """
        if max_volume_size <= 0:
            raise ValueError("max_volume_size must be positive")

        self.base_dir = Path(base_dir)
        self.temp_dir = Path(temp_dir)
        self.max_volume_size = max_volume_size
        self.compression = compression

        self.volumes: List[ArchiveVolume] = []
        self.sequence_index = 0
        self._current: Optional[ArchiveVolume] = None
        self._zip: Optional[zipfile.ZipFile] = None
        self._rollover_failed = False

    @property
    def current_volume(self) -> Optional[ArchiveVolume]:
        return self._current

    @property
    def is_open(self) -> bool:
        return self._zip is not None

    def volume_path(self, index: int) -> Path:
        """Deterministic temporary path of volume ``index``."""
        return self.temp_dir / f"{FileHelper.folder_name(self.base_dir)}_{index}.zip"

    def open(self, index: int) -> Path:
        """Open volume ``index``, replacing any stale file at its path.

        Args:
            index: 1-based sequence index

        Returns:
            Path of the new volume
        """
        if self.is_open:
            raise RuntimeError("A volume is already open; close it first")

        path = self.volume_path(index)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.exists():
            logger.debug(f"Removing stale temp volume {path}")
            path.unlink()

        # Pre-1980 mtimes are clamped instead of rejected
        self._zip = zipfile.ZipFile(path, mode='w', compression=self.compression,
                                    strict_timestamps=False)
        self._current = ArchiveVolume(path=path, sequence_index=index)
        self.sequence_index = index
        logger.info(f"Temp zip file is at - {path}")
        return path

    def start(self) -> Path:
        """Open volume 1."""
        return self.open(1)

    def _close_current(self) -> None:
        if self._zip is None:
            return
        try:
            self._zip.close()
        finally:
            self._zip = None
            self.volumes.append(self._current)
            self._current = None

    def _rollover(self) -> None:
        finished = self._current
        self._close_current()
        logger.info(f"Volume {finished.path} reached {FileHelper.format_file_size(finished.accumulated_size)}, "
                    f"starting volume {self.sequence_index + 1}")
        try:
            self.open(self.sequence_index + 1)
        except OSError as e:
            # Builder stays closed; later adds fail one by one
            self._rollover_failed = True
            logger.error(f"Failed to open volume {self.sequence_index + 1} for '{self.base_dir}': {e}")

    def add_file(self, absolute_path: Path, relative_path: str, size: int) -> bool:
        """Write a file into the open volume under ``relative_path``.

        Args:
            absolute_path: File to read
            relative_path: Member name inside the volume
            size: Uncompressed size counted against the cap

        Returns:
            True if the file was added, False if writing it failed
        """
        if not self.is_open:
            if self._rollover_failed:
                logger.error(f"Failed to add '{absolute_path}' to zip: no open volume")
                return False
            raise RuntimeError("No open volume; call start() first")

        try:
            self._zip.write(absolute_path, arcname=relative_path)
        except (OSError, zipfile.BadZipFile, ValueError) as e:
            logger.error(f"Failed to add '{absolute_path}' to zip: {e}")
            return False

        self._current.accumulated_size += size
        self._current.file_count += 1
        logger.info(f"Added '{absolute_path}' to zip")

        if self._current.accumulated_size > self.max_volume_size:
            self._rollover()
        return True

    def close(self) -> List[ArchiveVolume]:
        """Close the open volume, even if empty.

        Returns:
            Every volume created so far, in creation order
        """
        self._close_current()
        return list(self.volumes)

    def __enter__(self):
        if not self.is_open and not self.volumes:
            self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
