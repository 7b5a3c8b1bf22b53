"""File metadata and change detection against the checkpoint."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class FileInfo:
    """Information about a file for change detection."""
    path: Path
    size: int
    modified_at: datetime
    created_at: datetime


def read_file_info(file_path: Path) -> FileInfo:
    """Read size and timestamps of a file with a single ``stat`` call.

    ``created_at`` uses the birth time where the platform records one and
    falls back to ``st_ctime``.

    Args:
        file_path: Path to the file

    Returns:
        FileInfo for the file

    Raises:
        OSError: If the file cannot be stat'ed
    """
    stat = Path(file_path).stat()
    created = getattr(stat, 'st_birthtime', None)
    if created is None:
        created = stat.st_ctime

    return FileInfo(
        path=Path(file_path),
        size=stat.st_size,
        modified_at=datetime.fromtimestamp(stat.st_mtime),
        created_at=datetime.fromtimestamp(created),
    )


def is_eligible(file_info: FileInfo, checkpoint: datetime) -> bool:
    """Check if a file changed since the checkpoint.

    Args:
        file_info: Metadata read at evaluation time
        checkpoint: Instant of the last completed sync

    Returns:
        True if the file was modified or created strictly after the checkpoint
    """
    return file_info.modified_at > checkpoint or file_info.created_at > checkpoint
