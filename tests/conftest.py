# tests/conftest.py
from __future__ import annotations

import io
import tarfile
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

import pytest

from skill_installer.domain.errors import CloneFailure, DownloadFailure

WORKFLOW_SKILL = b"""---
name: planner
description: Plan the work before touching code
tags: [workflow]
languages: [any]
---

# Planner
"""

PLAIN_SKILL = b"""---
name: formatter
description: Keep formatting consistent
---

# Formatter
"""


def write_tree(root: Path, files: Mapping[str, Union[bytes, str]]) -> Path:
    for rel, data in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data.encode("utf-8") if isinstance(data, str) else data)
    return root


def make_tarball(entries: Iterable[tuple]) -> io.BytesIO:
    """entries: (name, bytes, mode) for files, (name, None, mode) for directories, (name, ("symlink", target), 0) for links."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, payload, extra in entries:
            info = tarfile.TarInfo(name)
            if isinstance(payload, bytes):
                info.size = len(payload)
                info.mode = extra
                tar.addfile(info, io.BytesIO(payload))
            elif payload is None:
                info.type = tarfile.DIRTYPE
                info.mode = extra
                tar.addfile(info)
            else:
                info.type = tarfile.SYMTYPE
                info.linkname = payload[1]
                tar.addfile(info)
    buf.seek(0)
    return buf


class FakeGit:
    """Stands in for a clone by copying a prepared tree into the destination."""

    def __init__(self, files: Optional[Mapping[str, Union[bytes, str]]] = None, *, fail_with: str | None = None) -> None:
        self.files = dict(files or {})
        self.fail_with = fail_with
        self.calls: list[tuple[str, Path, int]] = []

    def clone(self, url: str, dest, *, depth: int = 1) -> None:
        self.calls.append((url, Path(dest), depth))
        if self.fail_with is not None:
            (Path(dest) / "partial").write_text("x", encoding="utf-8")
            raise CloneFailure(url, self.fail_with)
        write_tree(Path(dest), self.files)


class FakeFetcher:
    def __init__(self, body: bytes = b"", *, status: int = 200) -> None:
        self.body = body
        self.status = status
        self.urls: list[str] = []

    @contextmanager
    def open(self, url: str):
        self.urls.append(url)
        if self.status != 200:
            raise DownloadFailure(url, status=self.status)
        yield io.BytesIO(self.body)


@pytest.fixture
def two_unit_tree(tmp_path) -> Path:
    return write_tree(
        tmp_path / "src",
        {
            "skills/planner/SKILL.md": WORKFLOW_SKILL,
            "skills/planner/notes/steps.md": "1. think\n2. write\n",
            "skills/planner/template.txt": "plain text",
            "skills/formatter/SKILL.md": PLAIN_SKILL,
        },
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("SKILL_INSTALLER_LOG_LEVEL", "SKILL_INSTALLER_GIT_TIMEOUT", "SKILL_INSTALLER_HTTP_TIMEOUT", "SKILL_INSTALLER_LOG_FILE", "SKILL_INSTALLER_DEBUG"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cli_app():
    from skill_installer.apps.cli.app import app

    return app


@pytest.fixture
def scratch_root(tmp_path, monkeypatch):
    """Redirects scratch directories into ``tmp_path/scratch`` so leftovers can be counted."""
    root = tmp_path / "scratch"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root
