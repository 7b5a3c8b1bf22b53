"""Delivery of finished volumes to the target folder and temp cleanup."""

import logging
import shutil
from pathlib import Path
from typing import Iterable, List

from .archive_builder import ArchiveVolume

logger = logging.getLogger(__name__)


def volume_target_name(source_name: str, timestamp: str, index: int) -> str:
    """Name of volume ``index`` in the target folder.

    >>> volume_target_name("docs", "20240101_120000", 1)
    'docs_20240101_120000.zip'
    >>> volume_target_name("docs", "20240101_120000", 2)
    'docs_20240101_120000_2.zip'
    """
    if index == 1:
        return f"{source_name}_{timestamp}.zip"
    return f"{source_name}_{timestamp}_{index}.zip"


def deliver(volumes: Iterable[ArchiveVolume], target_dir: Path,
            source_name: str, timestamp: str) -> List[Path]:
    """Copy volumes into ``target_dir``, overwriting existing files.

    Volumes are named by their position in creation order. A volume that no
    longer exists, or fails to copy, is logged and skipped.

    Args:
        volumes: Volumes in creation order
        target_dir: Destination folder
        source_name: Source folder name used as file name prefix
        timestamp: Run timestamp shared by all volumes of the pair

    Returns:
        Paths of the delivered files
    """
    target_dir = Path(target_dir)
    delivered = []

    for position, volume in enumerate(volumes, start=1):
        if not volume.path.exists():
            logger.warning(f"Temp zip file '{volume.path}' does not exist.")
            continue

        target_path = target_dir / volume_target_name(source_name, timestamp, position)
        try:
            shutil.copyfile(volume.path, target_path)
        except OSError as e:
            logger.error(f"Failed to copy '{volume.path}' to '{target_path}': {e}")
            continue

        logger.info(f"Copied zip file to '{target_path}'")
        delivered.append(target_path)

    return delivered


def cleanup(volumes: Iterable[ArchiveVolume]) -> int:
    """Delete every temp volume that still exists.

    Returns:
        Number of files deleted
    """
    deleted = 0
    for volume in volumes:
        if not volume.path.exists():
            continue
        try:
            volume.path.unlink()
        except OSError as e:
            logger.error(f"Failed to delete temp zip file '{volume.path}': {e}")
            continue
        logger.info(f"Deleted temp zip file '{volume.path}'")
        deleted += 1
    return deleted
