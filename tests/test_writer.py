# tests/test_writer.py
import os
import stat

import pytest

from skill_installer.domain import WritePolicy, WriteStatus
from skill_installer.domain.errors import WriteFailure
from skill_installer.services.writer import FileWriter, file_exists


@pytest.mark.parametrize(
    "policy, setup, status, written",
    [
        (WritePolicy(), False, WriteStatus.CREATED, True),
        (WritePolicy(force=False), True, WriteStatus.SKIPPED, False),
        (WritePolicy(force=True), True, WriteStatus.UPDATED, True),
        (WritePolicy(dry_run=True), False, WriteStatus.WOULD_CREATE, False),
        (WritePolicy(force=True, dry_run=True), True, WriteStatus.WOULD_UPDATE, False),
        (WritePolicy(dry_run=True), True, WriteStatus.SKIPPED, False),
    ],
)
def test_write_policies(tmp_path, policy, setup, status, written):
    target = tmp_path / "file.txt"
    if setup:
        target.write_bytes(b"original")

    result = FileWriter(policy).write(target, b"new content")

    assert result.status is status
    assert result.path == target
    if written:
        assert target.read_bytes() == b"new content"
    elif setup:
        assert target.read_bytes() == b"original"
    else:
        assert not target.exists()
    # nothing but the target itself is left behind
    assert [p.name for p in tmp_path.iterdir()] == (["file.txt"] if (setup or written) else [])


def test_creates_missing_parents(tmp_path):
    deep = tmp_path / "a" / "b" / "c" / "file.txt"
    result = FileWriter().write(deep, b"\x00\x01exact bytes")
    assert result.status is WriteStatus.CREATED
    assert deep.read_bytes() == b"\x00\x01exact bytes"


def test_dry_run_does_not_create_parents(tmp_path):
    FileWriter(WritePolicy(dry_run=True)).write(tmp_path / "x" / "y.md", b"data")
    assert not (tmp_path / "x").exists()


@pytest.mark.skipif(os.name == "nt", reason="posix permissions")
def test_created_file_mode(tmp_path):
    target = tmp_path / "m.md"
    FileWriter().write(target, b"x")
    assert stat.S_IMODE(target.stat().st_mode) == 0o644


def test_directory_in_the_way_is_a_write_failure(tmp_path):
    (tmp_path / "taken").mkdir()
    with pytest.raises(WriteFailure) as exc:
        FileWriter().write(tmp_path / "taken", b"x")
    assert exc.value.path == str(tmp_path / "taken")
    assert [p.name for p in tmp_path.iterdir()] == ["taken"]


def test_file_in_place_of_parent_is_a_write_failure(tmp_path):
    (tmp_path / "blocker").write_text("i am a file", encoding="utf-8")
    with pytest.raises(WriteFailure):
        FileWriter().write(tmp_path / "blocker" / "child.md", b"x")


def test_file_exists(tmp_path):
    f = tmp_path / "exists.txt"
    f.write_text("test", encoding="utf-8")
    assert file_exists(f)
    assert not file_exists(tmp_path / "does-not-exist.txt")
    assert not file_exists(tmp_path)


def test_result_rendering(tmp_path):
    target = tmp_path / "a.md"
    target.write_text("x", encoding="utf-8")
    assert str(FileWriter().write(target, b"y")).startswith("SKIP: ")
    assert str(FileWriter(WritePolicy(force=True, dry_run=True)).write(target, b"y")).startswith("WOULD OVERWRITE: ")
    assert str(FileWriter(WritePolicy(force=True)).write(target, b"y")).startswith("UPDATED: ")
