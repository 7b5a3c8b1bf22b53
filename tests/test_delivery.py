"""Tests for volume delivery and temp cleanup."""

from folder_sync.sync.archive_builder import ArchiveVolume
from folder_sync.sync.delivery import cleanup, deliver, volume_target_name

from .conftest import write_file


def test_volume_target_names():
    assert volume_target_name("docs", "20240101_120000", 1) == "docs_20240101_120000.zip"
    assert volume_target_name("docs", "20240101_120000", 2) == "docs_20240101_120000_2.zip"
    assert volume_target_name("docs", "20240101_120000", 10) == "docs_20240101_120000_10.zip"


def _volumes(tmp_path, count):
    return [
        ArchiveVolume(path=write_file(tmp_path / "tmp" / f"docs_{i}.zip", f"volume {i}"), sequence_index=i)
        for i in range(1, count + 1)
    ]


def test_deliver_copies_in_creation_order(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    volumes = _volumes(tmp_path, 2)

    delivered = deliver(volumes, target, "docs", "20240101_120000")

    assert delivered == [target / "docs_20240101_120000.zip", target / "docs_20240101_120000_2.zip"]
    assert delivered[0].read_text() == "volume 1"
    assert delivered[1].read_text() == "volume 2"
    # Delivery copies; the temp files are removed by cleanup
    assert all(v.path.exists() for v in volumes)


def test_deliver_overwrites_existing_target(tmp_path):
    target = tmp_path / "target"
    write_file(target / "docs_20240101_120000.zip", "old")

    deliver(_volumes(tmp_path, 1), target, "docs", "20240101_120000")

    assert (target / "docs_20240101_120000.zip").read_text() == "volume 1"


def test_vanished_volume_is_skipped(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    volumes = _volumes(tmp_path, 3)
    volumes[1].path.unlink()

    delivered = deliver(volumes, target, "docs", "20240101_120000")

    # Names follow the position in creation order, not the delivered count
    assert delivered == [target / "docs_20240101_120000.zip", target / "docs_20240101_120000_3.zip"]


def test_cleanup_deletes_existing_volumes(tmp_path):
    volumes = _volumes(tmp_path, 2)
    volumes[0].path.unlink()

    assert cleanup(volumes) == 1
    assert not any(v.path.exists() for v in volumes)
    assert cleanup(volumes) == 0
