# tests/test_archive.py
import os
import stat
import tarfile

import pytest

from skill_installer.domain.errors import IllegalArchivePath, WriteFailure
from skill_installer.services.archive import extract_tar_gz, safe_target

from conftest import make_tarball


def test_extracts_dirs_and_files(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    body = make_tarball(
        [
            ("pkg/", None, 0o755),
            ("pkg/skills/a/SKILL.md", b"---\nname: a\n---\n", 0o644),
            ("pkg/skills/a/deep/more.md", b"more", 0o644),
        ]
    )
    assert extract_tar_gz(body, out) == 2
    assert (out / "pkg" / "skills" / "a" / "SKILL.md").read_bytes() == b"---\nname: a\n---\n"
    assert (out / "pkg" / "skills" / "a" / "deep" / "more.md").read_bytes() == b"more"


@pytest.mark.skipif(os.name == "nt", reason="posix permissions")
def test_file_mode_is_preserved(tmp_path):
    extract_tar_gz(make_tarball([("run.sh", b"#!/bin/sh\n", 0o755), ("ro.md", b"r", 0o640)]), tmp_path)
    assert stat.S_IMODE((tmp_path / "run.sh").stat().st_mode) == 0o755
    assert stat.S_IMODE((tmp_path / "ro.md").stat().st_mode) == 0o640


def test_traversal_aborts_extraction(tmp_path):
    out = tmp_path / "nested" / "out"
    out.mkdir(parents=True)
    body = make_tarball(
        [
            ("ok.md", b"fine", 0o644),
            ("../../etc/passwd", b"evil", 0o644),
            ("after.md", b"never", 0o644),
        ]
    )
    with pytest.raises(IllegalArchivePath) as exc:
        extract_tar_gz(body, out)
    assert exc.value.name == "../../etc/passwd"
    assert (out / "ok.md").exists()
    assert not (out / "after.md").exists()
    assert not (tmp_path / "etc").exists()


@pytest.mark.parametrize("name", ["/abs/path.md", "a/../../x.md", "../out2/x.md", ".."])
def test_safe_target_rejects(tmp_path, name):
    root = str(tmp_path / "out")
    with pytest.raises(IllegalArchivePath):
        safe_target(root, name)


@pytest.mark.parametrize("name, rel", [("a/../b.md", "b.md"), ("./c/d.md", "c/d.md"), ("./", "")])
def test_safe_target_accepts_paths_that_stay_inside(tmp_path, name, rel):
    root = str(tmp_path / "out")
    assert safe_target(root, name) == os.path.normpath(os.path.join(root, rel))


def test_links_are_skipped(tmp_path):
    body = make_tarball([("link", ("symlink", "/etc/passwd"), 0), ("real.md", b"x", 0o644)])
    assert extract_tar_gz(body, tmp_path) == 1
    assert not os.path.lexists(tmp_path / "link")


def test_not_a_gzip_stream(tmp_path):
    import io

    with pytest.raises(tarfile.TarError):
        extract_tar_gz(io.BytesIO(b"definitely not gzip"), tmp_path)


def test_file_where_a_directory_is_needed(tmp_path):
    body = make_tarball([("a", b"plain file", 0o644), ("a/b.md", b"nested", 0o644)])
    with pytest.raises(WriteFailure) as exc:
        extract_tar_gz(body, tmp_path)
    assert exc.value.path == str(tmp_path / "a" / "b.md")
    assert "'a/b.md'" in str(exc.value)
    assert (tmp_path / "a").read_bytes() == b"plain file"


def test_file_over_an_extracted_directory(tmp_path):
    body = make_tarball([("a/", None, 0o755), ("a", b"clash", 0o644)])
    with pytest.raises(WriteFailure):
        extract_tar_gz(body, tmp_path)


def test_file_entry_naming_the_root(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    with pytest.raises(IllegalArchivePath):
        extract_tar_gz(make_tarball([(".", b"x", 0o644)]), out)
