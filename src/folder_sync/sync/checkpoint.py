"""Persistence of the last successful sync instant."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

NEVER_SYNCED = datetime.min

# Accepted besides ISO 8601, e.g. files written by older tools
FALLBACK_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%m/%d/%Y %I:%M:%S %p",
    "%m/%d/%Y %H:%M:%S",
)


def parse_checkpoint(text: str) -> Optional[datetime]:
    """Parse a stored checkpoint into a naive local datetime.

    Args:
        text: Checkpoint file content

    Returns:
        Parsed instant, or None if the text is not a date-time
    """
    text = text.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None
        for fmt in FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is not None and parsed.tzinfo is not None:
        # File timestamps are compared as naive local time
        try:
            parsed = parsed.astimezone().replace(tzinfo=None)
        except OverflowError:
            return None
    return parsed


class CheckpointStore:
    """Store the "last synchronized at" instant in a plain text file."""

    def __init__(self, checkpoint_file: Path):
        """Initialize checkpoint store.

        Args:
            checkpoint_file: Path to the checkpoint file
        """
        self.checkpoint_file = Path(checkpoint_file)

    def exists(self) -> bool:
        return self.checkpoint_file.exists()

    def _read(self) -> Optional[datetime]:
        try:
            text = self.checkpoint_file.read_text(encoding='utf-8-sig').strip()
        except (OSError, ValueError):
            return None
        return parse_checkpoint(text)

    def get(self) -> datetime:
        """Get the checkpoint.

        Returns:
            Stored instant, or ``datetime.min`` when no checkpoint exists or
            it cannot be parsed
        """
        if not self.checkpoint_file.exists():
            return NEVER_SYNCED

        checkpoint = self._read()
        if checkpoint is None:
            # Unparsable content counts as "never synced"
            logger.debug(f"Ignoring unreadable checkpoint in {self.checkpoint_file}")
            return NEVER_SYNCED
        return checkpoint

    def last_sync_time(self) -> Optional[datetime]:
        """Stored instant, or None if the store is empty or unreadable."""
        if not self.checkpoint_file.exists():
            return None
        return self._read()

    def set(self, now: datetime) -> None:
        """Persist ``now``, overwriting any previous checkpoint."""
        self.checkpoint_file.parent.mkdir(parents=True, exist_ok=True)
        self.checkpoint_file.write_text(now.isoformat(), encoding='utf-8')
        logger.info(f"Last sync time updated to {now.isoformat(sep=' ', timespec='seconds')}")

    def reset(self) -> None:
        """Delete the checkpoint. No-op when there is none."""
        self.checkpoint_file.unlink(missing_ok=True)
        logger.info("Last sync time has been reset")
