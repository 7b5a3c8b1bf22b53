"""Tests for exclusion pattern matching."""

from folder_sync.config.settings import DefaultPatterns, merge_patterns, parse_pair_line
from folder_sync.sync.exclusion import ExclusionMatcher, is_dir_excluded, is_file_excluded


def test_file_exclusion_is_substring(tmp_path):
    assert is_file_excluded(tmp_path / "src" / "cache" / "x.txt", {"cache"})
    assert is_file_excluded(tmp_path / "src" / "notes.tmp", {"tmp"})
    assert not is_file_excluded(tmp_path / "src" / "x.txt", {"cache"})


def test_dir_exclusion_is_suffix(tmp_path):
    assert is_dir_excluded(tmp_path / "src" / "node_modules", {"node_modules"})
    assert is_dir_excluded(tmp_path / "src" / "build_cache", {"cache"})
    assert not is_dir_excluded(tmp_path / "src" / "node_modules_old", {"node_modules"})
    assert not is_dir_excluded(tmp_path / "cache" / "src", {"cache"})


def test_patterns_are_literal_not_glob(tmp_path):
    assert not is_file_excluded(tmp_path / "a.txt", {"*.txt"})
    assert is_file_excluded(tmp_path / "a.txt", {".txt"})


def test_empty_pattern_matches_nothing(tmp_path):
    matcher = ExclusionMatcher({""}, {""})

    assert not matcher.excludes_file(tmp_path / "a.txt")
    assert not matcher.excludes_dir(tmp_path / "sub")


def test_matcher_keeps_file_and_dir_sets_apart(tmp_path):
    matcher = ExclusionMatcher(file_patterns={".log"}, dir_patterns={"build"})

    assert matcher.excludes_file(tmp_path / "run.log")
    assert not matcher.excludes_dir(tmp_path / "run.log")
    assert matcher.excludes_dir(tmp_path / "build")
    assert not matcher.excludes_file(tmp_path / "build.py")


def test_merge_collapses_duplicates():
    merged = merge_patterns({"tmp", "cache"}, ["cache", ".git"])

    assert merged == {"tmp", "cache", ".git"}


def test_pair_patterns_merge_with_defaults():
    defaults = DefaultPatterns(file_patterns={".tmp"}, dir_patterns={"node_modules"})

    pair = parse_pair_line("/src::::/dst::::.bak,cache", defaults)

    assert pair.file_exclude_patterns == {".tmp", ".bak", "cache"}
    assert pair.dir_exclude_patterns == {"node_modules", ".bak", "cache"}
