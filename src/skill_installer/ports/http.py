from __future__ import annotations
from contextlib import AbstractContextManager
from typing import BinaryIO, Protocol


class Fetcher(Protocol):
    def open(self, url: str) -> AbstractContextManager[BinaryIO]:
        """Stream the body of a successful GET; raises DownloadFailure otherwise."""
        ...
