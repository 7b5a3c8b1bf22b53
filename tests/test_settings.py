"""Tests for settings and pair-list loading."""

from pathlib import Path

import pytest

from folder_sync.config.settings import (
    DEFAULT_MAX_VOLUME_SIZE,
    DefaultPatterns,
    SyncSettings,
    load_pairs,
    parse_pair_line,
)

from .conftest import write_file

NO_DEFAULTS = DefaultPatterns()


def test_default_settings():
    settings = SyncSettings()

    assert settings.checkpoint_file == Path("lastSync.txt")
    assert settings.log_file == Path("syncLog.txt")
    assert settings.max_volume_size == DEFAULT_MAX_VOLUME_SIZE == 500 * 1024 * 1024
    assert settings.timestamp_format == "%Y%m%d_%H%M%S"


def test_yaml_round_trip(tmp_path):
    config = tmp_path / "folder_sync.yaml"
    SyncSettings(max_volume_size=1024, log_level="debug", temp_dir=tmp_path).to_yaml(config)

    loaded = SyncSettings.from_yaml(config)

    assert loaded.max_volume_size == 1024
    assert loaded.log_level == "DEBUG"
    assert loaded.temp_dir == tmp_path


def test_invalid_settings_raise_value_error(tmp_path):
    config = write_file(tmp_path / "folder_sync.yaml", "max_volume_size: 0\n")

    with pytest.raises(ValueError):
        SyncSettings.from_yaml(config)


def test_invalid_log_level(tmp_path):
    config = write_file(tmp_path / "folder_sync.yaml", "log_level: LOUD\n")

    with pytest.raises(ValueError):
        SyncSettings.from_yaml(config)


def test_load_falls_back_to_defaults(tmp_path):
    assert SyncSettings.load(tmp_path / "missing.yaml") == SyncSettings.load(None)


def test_default_pattern_files(settings):
    write_file(settings.file_patterns_file, ".tmp\n\n  .bak  \n.tmp\n")
    write_file(settings.dir_patterns_file, "node_modules\n.git\n")

    defaults = settings.load_default_patterns()

    assert defaults.file_patterns == {".tmp", ".bak"}
    assert defaults.dir_patterns == {"node_modules", ".git"}


def test_missing_pattern_files_give_empty_sets(settings):
    defaults = settings.load_default_patterns()

    assert defaults.file_patterns == frozenset()
    assert defaults.dir_patterns == frozenset()


def test_parse_pair_line_fields():
    pair = parse_pair_line(" /data/docs ::::/backup/docs::::a, b,,", NO_DEFAULTS)

    assert pair.source_path == Path("/data/docs")
    assert pair.target_path == Path("/backup/docs")
    assert pair.file_exclude_patterns == {"a", "b"}
    assert pair.source_name == "docs"


def test_parse_pair_line_without_patterns():
    pair = parse_pair_line("/data/docs::::/backup", NO_DEFAULTS)

    assert pair.file_exclude_patterns == frozenset()
    assert pair.dir_exclude_patterns == frozenset()


def test_parse_pair_line_too_few_fields():
    assert parse_pair_line("/data/docs", NO_DEFAULTS) is None
    assert parse_pair_line("/data/docs::::", NO_DEFAULTS) is None


def test_load_pairs_skips_invalid_lines(tmp_path, caplog):
    folder_list = write_file(
        tmp_path / "folders.txt",
        "# comment\n/a::::/b\n\nbroken line\n/c::::/d::::x\n",
    )

    pairs = load_pairs(folder_list, NO_DEFAULTS)

    assert [(str(p.source_path), str(p.target_path)) for p in pairs] == [("/a", "/b"), ("/c", "/d")]
    assert "Invalid line in folder list file: 'broken line'" in caplog.text


def test_load_pairs_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_pairs(tmp_path / "missing.txt", NO_DEFAULTS)


def test_pair_is_immutable():
    pair = parse_pair_line("/a::::/b", NO_DEFAULTS)

    with pytest.raises(Exception):
        pair.source_path = Path("/elsewhere")


def test_load_pairs_strips_bom(tmp_path):
    folder_list = tmp_path / "folders.txt"
    folder_list.write_text("/data/docs::::/backup\n/data/pics::::/backup\n", encoding="utf-8-sig")

    pairs = load_pairs(folder_list, NO_DEFAULTS)

    assert pairs[0].source_path == Path("/data/docs")
    assert pairs[0].source_name == "docs"


def test_pattern_file_strips_bom(settings):
    settings.file_patterns_file.write_text(".tmp\n.bak\n", encoding="utf-8-sig")

    defaults = settings.load_default_patterns()

    assert defaults.file_patterns == {".tmp", ".bak"}
