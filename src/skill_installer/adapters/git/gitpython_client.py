# adapters/git/gitpython_client.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from git import Repo
from git.exc import GitCommandError

from skill_installer.config import const
from skill_installer.domain.errors import CloneFailure
from skill_installer.ports.git import StrOrPath

log = logging.getLogger("skill_installer.git")


def _combined_output(e: GitCommandError) -> str:
    parts = [str(getattr(e, "stdout", "") or "").strip(), str(getattr(e, "stderr", "") or "").strip()]
    text = "\n".join(p for p in parts if p)
    return text or str(e)


class GitPythonClient:
    """
    Shallow clones through GitPython.
    git has no overall deadline for a clone, so a transfer slower than 1 byte/s
    for ``timeout`` seconds is treated as stalled and aborted by git itself.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = const.GIT_TIMEOUT if timeout is None else timeout

    def _env(self) -> dict[str, str]:
        return {
            "GIT_TERMINAL_PROMPT": "0",
            "GIT_HTTP_LOW_SPEED_LIMIT": "1",
            "GIT_HTTP_LOW_SPEED_TIME": str(max(1, int(self.timeout))),
        }

    def clone(self, url: str, dest: StrOrPath, *, depth: int = 1) -> None:
        d = Path(dest)
        log.info("git.clone", extra={"extra": {"url": url, "dest": str(d), "depth": depth}})
        kwargs = {"depth": depth} if depth > 0 else {}
        try:
            Repo.clone_from(url, d, env=self._env(), **kwargs)
        except GitCommandError as e:
            raise CloneFailure(url, _combined_output(e)) from e
