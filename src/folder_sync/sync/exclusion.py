"""Exclusion pattern matching.

Patterns are literal strings, not globs or regular expressions. Files are
excluded when their path *contains* a pattern; directories only when their
path *ends with* one. The two rules are deliberately different.
"""

from pathlib import Path
from typing import Iterable, Union

from ..config.settings import SyncPair
from ..utils.file_utils import FileHelper

PathLike = Union[str, Path]


def is_file_excluded(path: PathLike, patterns: Iterable[str]) -> bool:
    """True if the normalized file path contains any pattern."""
    normalized = FileHelper.normalize_path(Path(path))
    return any(pattern in normalized for pattern in patterns if pattern)


def is_dir_excluded(path: PathLike, patterns: Iterable[str]) -> bool:
    """True if the normalized directory path ends with any pattern."""
    normalized = FileHelper.normalize_path(Path(path))
    return any(normalized.endswith(pattern) for pattern in patterns if pattern)


class ExclusionMatcher:
    """Exclusion rules bound to one pair's pattern sets."""

    def __init__(self, file_patterns: Iterable[str], dir_patterns: Iterable[str]):
        self.file_patterns = frozenset(p for p in file_patterns if p)
        self.dir_patterns = frozenset(p for p in dir_patterns if p)

    @classmethod
    def for_pair(cls, pair: SyncPair) -> "ExclusionMatcher":
        return cls(pair.file_exclude_patterns, pair.dir_exclude_patterns)

    def excludes_file(self, path: PathLike) -> bool:
        return is_file_excluded(path, self.file_patterns)

    def excludes_dir(self, path: PathLike) -> bool:
        return is_dir_excluded(path, self.dir_patterns)
