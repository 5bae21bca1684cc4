from __future__ import annotations

import importlib.resources as ir
import logging
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from skill_installer.domain.errors import ReadFailure
from skill_installer.ports.source import Entry

log = logging.getLogger("skill_installer.source")

_BUNDLE_PACKAGE = "skill_installer"
_BUNDLE_DIR = "bundle"


def _parts(path: str) -> tuple[str, ...]:
    rel = PurePosixPath(path.strip("/")) if path.strip("/") else PurePosixPath()
    if rel.is_absolute() or ".." in rel.parts:
        raise ValueError(f"unsafe path traversal: {path!r}")
    return tuple(p for p in rel.parts if p not in ("", "."))


class TreeSource:
    """
    ContentSource over anything that speaks importlib's Traversable (a Path included).
    On the filesystem, symlinked directories are never entered, and links that are
    dangling or resolve outside the root are left out of listings.
    """

    def __init__(self, root: Union[Traversable, Path], *, label: str | None = None) -> None:
        self.root = root
        self.label = label or str(root)
        self._real_root: Optional[Path] = root.resolve() if isinstance(root, Path) else None

    def _inside(self, node: Traversable) -> bool:
        if self._real_root is None or not isinstance(node, Path):
            return True
        try:
            node.resolve().relative_to(self._real_root)
        except (ValueError, OSError, RuntimeError):
            return False
        return True

    def _node(self, path: str) -> Traversable:
        node = self.root
        for part in _parts(path):
            node = node.joinpath(part)
        if not self._inside(node):
            raise ReadFailure(f"{self.label}:{path}", reason="path escapes the source root")
        return node

    def _entry(self, child: Traversable) -> Optional[Entry]:
        if isinstance(child, Path) and child.is_symlink():
            if child.is_dir() or not child.is_file():
                log.debug("source.skip_link", extra={"extra": {"path": str(child)}})
                return None
            if not self._inside(child):
                log.warning("source.link_escapes", extra={"extra": {"path": str(child), "root": str(self._real_root)}})
                return None
            return Entry(name=child.name, is_dir=False)
        return Entry(name=child.name, is_dir=child.is_dir())

    def list_dir(self, path: str) -> list[Entry]:
        node = self._node(path)
        if not node.is_dir():
            raise FileNotFoundError(f"{self.label}:{path or '/'}")
        try:
            entries = [self._entry(child) for child in node.iterdir()]
        except OSError as e:
            raise ReadFailure(f"{self.label}:{path}", reason=str(e)) from e
        return [e for e in entries if e is not None]

    def read_bytes(self, path: str) -> bytes:
        node = self._node(path)
        if not node.is_file():
            raise FileNotFoundError(f"{self.label}:{path}")
        try:
            return node.read_bytes()
        except OSError as e:
            raise ReadFailure(f"{self.label}:{path}", reason=str(e)) from e

    def exists(self, path: str) -> bool:
        try:
            node = self._node(path)
        except ReadFailure:
            return False
        return node.is_file() or node.is_dir()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label!r})"


class EmbeddedSource(TreeSource):
    """The skills, agents and commands bundled inside this package."""

    def __init__(self, root: Traversable | None = None) -> None:
        super().__init__(root or ir.files(_BUNDLE_PACKAGE) / _BUNDLE_DIR, label="<bundle>")


class LocalDirSource(TreeSource):
    def __init__(self, root: Union[str, Path]) -> None:
        p = Path(root).expanduser()
        if not p.is_dir():
            raise ReadFailure(str(p), reason="not a directory")
        super().__init__(p.resolve(), label=str(p))
