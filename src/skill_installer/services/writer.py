from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Union

from skill_installer.domain import WritePolicy, WriteResult, WriteStatus
from skill_installer.domain.errors import WriteFailure

log = logging.getLogger("skill_installer.writer")

FILE_MODE = 0o644


def file_exists(path: Union[str, Path]) -> bool:
    """True for an existing non-directory entry."""
    p = Path(path)
    return p.exists() and not p.is_dir()


def write_bytes_atomic(path: Path, data: bytes, mode: int = FILE_MODE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    finally:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass


class FileWriter:
    """
    Applies a WritePolicy to one destination file at a time:
      - existing file without force -> SKIPPED, untouched
      - dry run                     -> WOULD_CREATE / WOULD_UPDATE, no side effects
      - otherwise                   -> parents created, content swapped in atomically
    """

    def __init__(self, policy: WritePolicy | None = None) -> None:
        self.policy = policy or WritePolicy()

    def write(self, path: Union[str, Path], data: bytes) -> WriteResult:
        p = Path(path)
        exists = file_exists(p)

        if exists and not self.policy.force:
            return WriteResult(WriteStatus.SKIPPED, p)

        if self.policy.dry_run:
            return WriteResult(WriteStatus.WOULD_UPDATE if exists else WriteStatus.WOULD_CREATE, p)

        try:
            mode = stat.S_IMODE(p.stat().st_mode) if exists else FILE_MODE
            write_bytes_atomic(p, data, mode)
        except OSError as e:
            raise WriteFailure(str(p), reason=e.strerror or str(e)) from e
        status = WriteStatus.UPDATED if exists else WriteStatus.CREATED
        log.debug("writer.%s", status.value, extra={"extra": {"path": str(p), "bytes": len(data)}})
        return WriteResult(status, p)
