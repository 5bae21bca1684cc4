# src/skill_installer/services/acquire.py
from __future__ import annotations

import gzip
import logging
import shutil
import tarfile
import tempfile
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

from skill_installer.config import const
from skill_installer.domain.errors import DownloadFailure, ReadFailure
from skill_installer.ports.git import GitClient
from skill_installer.ports.http import Fetcher
from skill_installer.services.archive import extract_tar_gz

log = logging.getLogger("skill_installer.acquire")


class SourceKind(str, Enum):
    LOCAL = "local"
    GIT = "git"
    TARBALL = "tarball"


def _looks_like_url(s: str) -> bool:
    return s.startswith(("http://", "https://"))


def classify_source(locator: str) -> SourceKind:
    if _looks_like_url(locator):
        if any(host in locator for host in const.GIT_HOSTS):
            return SourceKind.GIT
        return SourceKind.TARBALL
    return SourceKind.LOCAL


@contextmanager
def scratch_dir() -> Iterator[Path]:
    """Fresh process-unique directory, removed on every exit path."""
    tmp = Path(tempfile.mkdtemp(prefix=const.TEMP_PREFIX))
    try:
        yield tmp
    finally:
        shutil.rmtree(tmp, ignore_errors=True)
        log.debug("acquire.cleanup", extra={"extra": {"dir": str(tmp)}})


def skills_root_of(checkout: Path) -> Path:
    """A repository's ``skills/`` directory when it has one, else the checkout itself."""
    sub = checkout / const.SKILLS_ROOT
    return sub if sub.is_dir() else checkout


@contextmanager
def acquire(locator: str, *, git: Optional[GitClient] = None, fetcher: Optional[Fetcher] = None) -> Iterator[Path]:
    """Yield a local directory holding the files behind ``locator`` (path, git URL or tarball URL)."""
    kind = classify_source(locator)
    log.info("acquire.start", extra={"extra": {"locator": locator, "kind": kind.value}})

    if kind is SourceKind.LOCAL:
        p = Path(locator).expanduser()
        if not p.is_dir():
            raise ReadFailure(str(p), reason="no such directory")
        yield p
        return

    if kind is SourceKind.GIT:
        if git is None:
            from skill_installer.adapters.git import GitPythonClient

            git = GitPythonClient()
        with scratch_dir() as tmp:
            git.clone(locator, tmp, depth=1)
            yield skills_root_of(tmp)
        return

    if fetcher is None:
        from skill_installer.adapters.http import RequestsFetcher

        fetcher = RequestsFetcher()
    with scratch_dir() as tmp:
        with fetcher.open(locator) as body:
            try:
                count = extract_tar_gz(body, tmp)
            except (tarfile.TarError, gzip.BadGzipFile, EOFError) as e:
                raise DownloadFailure(locator, reason=f"extracting archive: {e}") from e
        log.info("acquire.extracted", extra={"extra": {"url": locator, "files": count}})
        yield tmp
