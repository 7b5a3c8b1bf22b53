"""File utility functions."""

import os
from pathlib import Path
from typing import Set


class FileHelper:
    """Helper class for file operations."""

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        """Format file size in human readable format.

        Args:
            size_bytes: Size in bytes

        Returns:
            Formatted size string
        """
        if size_bytes == 0:
            return "0 B"

        size_names = ["B", "KB", "MB", "GB", "TB", "PB"]
        i = 0
        size = float(size_bytes)

        while size >= 1024 and i < len(size_names) - 1:
            size /= 1024.0
            i += 1

        return f"{size:.1f} {size_names[i]}"

    @staticmethod
    def normalize_path(path: Path) -> str:
        """Absolute, normalized path string used for pattern matching.

        Symlinks are not resolved so patterns match the path as walked.
        """
        return os.path.normpath(os.path.abspath(str(path)))

    @staticmethod
    def get_relative_path(file_path: Path, base_path: Path) -> str:
        """Get the archive member name of a file below ``base_path``.

        Args:
            file_path: Full file path
            base_path: Base path to calculate relative from

        Returns:
            Relative path with forward slashes
        """
        try:
            return Path(file_path).relative_to(base_path).as_posix()
        except ValueError:
            # Not below base: fall back to the bare name so nothing escapes the volume root
            return Path(file_path).name

    @staticmethod
    def folder_name(folder: Path) -> str:
        """Last component of a folder path, ignoring trailing separators.

        Args:
            folder: Folder path

        Returns:
            Folder name, or ``root`` for a filesystem root
        """
        name = Path(str(folder).rstrip("/\\")).name
        return name or "root"

    @staticmethod
    def read_pattern_file(pattern_file: Path) -> Set[str]:
        """Read a newline-delimited pattern file.

        Args:
            pattern_file: Path to the pattern file

        Returns:
            Set of non-empty, stripped patterns; empty if the file is missing
        """
        pattern_file = Path(pattern_file)
        if not pattern_file.exists():
            return set()

        with open(pattern_file, 'r', encoding='utf-8-sig') as f:
            return {line.strip() for line in f if line.strip()}
