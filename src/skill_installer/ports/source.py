from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Iterator


@dataclass(frozen=True, slots=True)
class Entry:
    name: str
    is_dir: bool


class ContentSource(Protocol):
    """Read-only tree of files addressed by slash-separated paths ("" is the root)."""

    def list_dir(self, path: str) -> list[Entry]:
        """Direct children of ``path``; raises FileNotFoundError when it does not exist."""
        ...

    def read_bytes(self, path: str) -> bytes: ...

    def exists(self, path: str) -> bool: ...


def join(*parts: str) -> str:
    return "/".join(p.strip("/") for p in parts if p and p.strip("/"))


def walk_files(source: ContentSource, path: str = "", *, skip_dirs: frozenset[str] = frozenset()) -> Iterator[str]:
    """Every file below ``path``, depth first, children in name order."""
    for entry in sorted(source.list_dir(path), key=lambda e: e.name):
        child = join(path, entry.name)
        if entry.is_dir:
            if entry.name in skip_dirs:
                continue
            yield from walk_files(source, child, skip_dirs=skip_dirs)
        else:
            yield child
