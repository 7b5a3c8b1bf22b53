"""Shared fixtures for the folder sync tests."""

import zipfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from folder_sync.config.settings import SyncPair, SyncSettings


def write_file(path: Path, content: str = "data") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def zip_members(path: Path) -> list:
    with zipfile.ZipFile(path) as zf:
        return sorted(zf.namelist())


@pytest.fixture
def past():
    """A checkpoint older than every file created by a test."""
    return datetime.now() - timedelta(hours=1)


@pytest.fixture
def future():
    """A checkpoint newer than every file created by a test."""
    return datetime.now() + timedelta(hours=1)


@pytest.fixture
def settings(tmp_path):
    """Settings writing everything below the test directory."""
    return SyncSettings(
        checkpoint_file=tmp_path / "lastSync.txt",
        log_file=None,
        log_to_console=False,
        file_patterns_file=tmp_path / "defaultExcludePatterns.txt",
        dir_patterns_file=tmp_path / "defaultDirExcludePatterns.txt",
        temp_dir=tmp_path / "tmp",
    )


@pytest.fixture
def source_dir(tmp_path):
    """Source tree with nested folders."""
    source = tmp_path / "docs"
    write_file(source / "a.txt", "alpha")
    write_file(source / "sub" / "b.txt", "bravo")
    write_file(source / "sub" / "deep" / "c.txt", "charlie")
    return source


@pytest.fixture
def target_dir(tmp_path):
    return tmp_path / "target"


@pytest.fixture
def pair(source_dir, target_dir):
    return SyncPair(source_path=source_dir, target_path=target_dir)
