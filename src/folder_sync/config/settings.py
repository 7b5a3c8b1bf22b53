"""Configuration settings and models for the sync application."""

import logging
import tempfile
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..utils.file_utils import FileHelper

logger = logging.getLogger(__name__)

PAIR_FIELD_DELIMITER = "::::"
PATTERN_DELIMITER = ","
DEFAULT_MAX_VOLUME_SIZE = 500 * 1024 * 1024  # 500 MiB


class SyncPair(BaseModel):
    """One source/target pair with its merged exclusion sets."""
    model_config = ConfigDict(frozen=True)

    source_path: Path
    target_path: Path
    file_exclude_patterns: FrozenSet[str] = frozenset()
    dir_exclude_patterns: FrozenSet[str] = frozenset()

    @field_validator('file_exclude_patterns', 'dir_exclude_patterns')
    @classmethod
    def drop_empty_patterns(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        # An empty substring would exclude every path
        return frozenset(p for p in v if p)

    @property
    def source_name(self) -> str:
        """Folder name used for volume and delivery file names."""
        return FileHelper.folder_name(self.source_path)


class SyncSettings(BaseModel):
    """Main settings class."""
    checkpoint_file: Path = Path("lastSync.txt")
    log_file: Optional[Path] = Path("syncLog.txt")
    log_level: str = "INFO"
    log_to_console: bool = True
    file_patterns_file: Path = Path("defaultExcludePatterns.txt")
    dir_patterns_file: Path = Path("defaultDirExcludePatterns.txt")
    max_volume_size: int = Field(default=DEFAULT_MAX_VOLUME_SIZE, gt=0)
    temp_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    timestamp_format: str = "%Y%m%d_%H%M%S"

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(valid_levels))}")
        return v_upper

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> "SyncSettings":
        """Load settings from a YAML file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
            return cls(**config_data)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in config file: {e}")
        except ValidationError as e:
            raise ValueError(f"Configuration validation error: {e}")

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> "SyncSettings":
        """Load settings from ``config_path`` if it exists, defaults otherwise."""
        if config_path and Path(config_path).exists():
            return cls.from_yaml(config_path)
        return cls()

    def to_yaml(self, config_path: Union[str, Path]) -> None:
        """Save settings to a YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.model_dump(mode='json', exclude_none=True), f,
                      default_flow_style=False, indent=2)

    def load_default_patterns(self) -> "DefaultPatterns":
        """Read the shared default exclusion sets."""
        return DefaultPatterns(
            file_patterns=frozenset(FileHelper.read_pattern_file(self.file_patterns_file)),
            dir_patterns=frozenset(FileHelper.read_pattern_file(self.dir_patterns_file)),
        )


class DefaultPatterns(BaseModel):
    """Exclusion patterns shared by every pair of a run."""
    model_config = ConfigDict(frozen=True)

    file_patterns: FrozenSet[str] = frozenset()
    dir_patterns: FrozenSet[str] = frozenset()


def merge_patterns(defaults: Iterable[str], custom: Iterable[str]) -> FrozenSet[str]:
    """Union of default and pair-specific patterns."""
    return frozenset(defaults) | frozenset(custom)


def parse_pair_line(line: str, defaults: DefaultPatterns) -> Optional[SyncPair]:
    """Parse one ``source::::target[::::p1,p2]`` line.

    Args:
        line: Raw line from the pair-list file
        defaults: Shared default exclusion patterns

    Returns:
        SyncPair, or None if the line has fewer than two fields
    """
    parts = [part for part in line.split(PAIR_FIELD_DELIMITER) if part]
    if len(parts) < 2:
        return None

    custom: List[str] = []
    if len(parts) >= 3:
        custom = [p.strip() for p in parts[2].split(PATTERN_DELIMITER) if p.strip()]

    return SyncPair(
        source_path=Path(parts[0].strip()),
        target_path=Path(parts[1].strip()),
        file_exclude_patterns=merge_patterns(defaults.file_patterns, custom),
        dir_exclude_patterns=merge_patterns(defaults.dir_patterns, custom),
    )


def load_pairs(pair_list_file: Union[str, Path], defaults: DefaultPatterns) -> List[SyncPair]:
    """Load the ordered list of sync pairs.

    Blank lines and ``#`` comments are ignored. Malformed lines are skipped
    with a warning so the remaining pairs still run.

    Args:
        pair_list_file: Path to the pair-list file
        defaults: Shared default exclusion patterns

    Returns:
        List of sync pairs in file order

    Raises:
        FileNotFoundError: If the pair-list file does not exist
    """
    pair_list_file = Path(pair_list_file)
    if not pair_list_file.exists():
        raise FileNotFoundError(f"File '{pair_list_file}' does not exist.")

    pairs = []
    with open(pair_list_file, 'r', encoding='utf-8-sig') as f:
        for line in f:
            line = line.rstrip('\r\n')
            if not line.strip() or line.lstrip().startswith('#'):
                continue

            pair = parse_pair_line(line, defaults)
            if pair is None:
                logger.warning(f"Invalid line in folder list file: '{line}'")
                continue
            pairs.append(pair)

    return pairs
