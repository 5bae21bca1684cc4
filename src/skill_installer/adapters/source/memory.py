from __future__ import annotations
from typing import Mapping, Union

from skill_installer.ports.source import Entry


class MemorySource:
    """
    Virtual tree kept in a mapping of slash paths to file contents:
        MemorySource({"skills/demo/SKILL.md": b"---\\nname: demo\\n---\\n"})
    Directories are implied by the file paths.
    """

    def __init__(self, files: Mapping[str, Union[bytes, str]]) -> None:
        self._files: dict[str, bytes] = {}
        for path, data in files.items():
            key = path.strip("/")
            self._files[key] = data.encode("utf-8") if isinstance(data, str) else bytes(data)

    def _is_dir(self, path: str) -> bool:
        if not path:
            return True
        prefix = path + "/"
        return any(k.startswith(prefix) for k in self._files)

    def list_dir(self, path: str) -> list[Entry]:
        path = path.strip("/")
        if not self._is_dir(path):
            raise FileNotFoundError(path)
        prefix = path + "/" if path else ""
        seen: dict[str, bool] = {}
        for key in self._files:
            if not key.startswith(prefix):
                continue
            head, sep, _ = key[len(prefix) :].partition("/")
            seen[head] = seen.get(head, False) or bool(sep)
        return [Entry(name=n, is_dir=d) for n, d in seen.items()]

    def read_bytes(self, path: str) -> bytes:
        try:
            return self._files[path.strip("/")]
        except KeyError:
            raise FileNotFoundError(path) from None

    def exists(self, path: str) -> bool:
        path = path.strip("/")
        return path in self._files or self._is_dir(path)
