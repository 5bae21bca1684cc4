"""Exceptions raised by the acquisition and installation pipeline."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "InstallerError",
    "MissingName",
    "ReadFailure",
    "CloneFailure",
    "DownloadFailure",
    "IllegalArchivePath",
    "WriteFailure",
    "UnknownTarget",
    "InvalidSkillName",
    "ConfigError",
]


class InstallerError(Exception):
    """Base class for every error the installer surfaces to its caller."""


class MissingName(InstallerError, ValueError):
    """Raised when a manifest header block carries no ``name:`` field."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(f"skill missing name in frontmatter: {path}" if path else "skill missing name in frontmatter")


class ReadFailure(InstallerError, OSError):
    """Raised when a manifest, a content file or a source root cannot be read."""

    def __init__(self, path: str, *, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"reading {path}: {reason}" if reason else f"reading {path}")


class CloneFailure(InstallerError, RuntimeError):
    """Raised when ``git clone`` exits non-zero; ``output`` holds what git printed."""

    def __init__(self, url: str, output: str = "") -> None:
        self.url = url
        self.output = output
        super().__init__(f"cloning {url}: {output.strip()}" if output.strip() else f"cloning {url}")


class DownloadFailure(InstallerError, RuntimeError):
    """Raised when a tarball download fails or answers with a non-200 status."""

    def __init__(self, url: str, *, status: int | None = None, reason: str | None = None) -> None:
        self.url = url
        self.status = status
        self.reason = reason
        if status is not None:
            text = f"downloading {url}: status {status}"
        elif reason:
            text = f"downloading {url}: {reason}"
        else:
            text = f"downloading {url}"
        super().__init__(text)


class IllegalArchivePath(InstallerError, ValueError):
    """Raised when an archive entry would land outside the extraction root."""

    def __init__(self, name: str, root: str) -> None:
        self.name = name
        self.root = root
        super().__init__(f"illegal file path in archive: {name!r} escapes {root}")


class WriteFailure(InstallerError, OSError):
    def __init__(self, path: str, *, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"writing {path}: {reason}" if reason else f"writing {path}")


class UnknownTarget(InstallerError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown target: {self.name}"


class InvalidSkillName(InstallerError, ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"invalid skill name: {name!r}")


class ConfigError(InstallerError):
    def __init__(self, path: str, *, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"loading config {path}: {reason}" if reason else f"loading config {path}")
