from __future__ import annotations
from pathlib import Path
from typing import Protocol, Union

StrOrPath = Union[str, Path]


class GitClient(Protocol):
    def clone(self, url: str, dest: StrOrPath, *, depth: int = 1) -> None:
        """Clone ``url`` into the (empty) directory ``dest``; raises CloneFailure."""
        ...
