from __future__ import annotations

import logging
import os
import shutil
import tarfile
from pathlib import Path
from typing import BinaryIO, Union

from skill_installer.domain.errors import IllegalArchivePath, WriteFailure

log = logging.getLogger("skill_installer.archive")

DIR_MODE = 0o755


def safe_target(root: str, name: str) -> str:
    """Destination of an archive entry; raises IllegalArchivePath when it leaves ``root``."""
    if not name or os.path.isabs(name) or name.startswith(("/", "\\")):
        raise IllegalArchivePath(name, root)
    target = os.path.normpath(os.path.join(root, name))
    if target != root and not target.startswith(root + os.sep):
        raise IllegalArchivePath(name, root)
    return target


def _write_member(src: BinaryIO, target: str, mode: int) -> None:
    os.makedirs(os.path.dirname(target), mode=DIR_MODE, exist_ok=True)
    with open(target, "wb") as out:
        shutil.copyfileobj(src, out)
    os.chmod(target, mode)


def extract_tar_gz(stream: BinaryIO, dest: Union[str, Path]) -> int:
    """
    Stream a gzip-compressed tarball into ``dest``; returns the number of files written.
    The archive is read strictly front to back, so ``stream`` can be a socket.
    Extraction stops at the first entry that would escape ``dest`` or cannot be
    written (a file where a directory is needed, say); whatever was already
    written stays in ``dest`` for the caller to discard.
    """
    root = os.path.normpath(os.path.abspath(str(dest)))
    written = 0
    with tarfile.open(fileobj=stream, mode="r|gz") as tar:
        for member in tar:
            target = safe_target(root, member.name)
            if not (member.isdir() or member.isreg()):
                log.debug("archive.skip", extra={"extra": {"name": member.name, "type": member.type.decode(errors="replace")}})
                continue
            if member.isreg() and target == root:
                raise IllegalArchivePath(member.name, root)
            try:
                if member.isdir():
                    os.makedirs(target, mode=DIR_MODE, exist_ok=True)
                    continue
                src = tar.extractfile(member)
                if src is None:
                    continue
                with src:
                    _write_member(src, target, member.mode & 0o777)
            except OSError as e:
                raise WriteFailure(target, reason=f"extracting {member.name!r}: {e.strerror or e}") from e
            written += 1
    return written
