from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

import requests
from urllib3.exceptions import HTTPError as TransportError

from skill_installer import __version__
from skill_installer.config import const
from skill_installer.domain.errors import DownloadFailure

log = logging.getLogger("skill_installer.http")


class RequestsFetcher:
    def __init__(self, connect_timeout: Optional[float] = None, read_timeout: Optional[float] = None) -> None:
        self.timeout = (
            const.HTTP_CONNECT_TIMEOUT if connect_timeout is None else connect_timeout,
            const.HTTP_READ_TIMEOUT if read_timeout is None else read_timeout,
        )
        self.headers = {"User-Agent": f"skill-installer/{__version__}"}

    @contextmanager
    def open(self, url: str) -> Iterator[BinaryIO]:
        log.info("http.get", extra={"extra": {"url": url}})
        try:
            resp = requests.get(url, stream=True, timeout=self.timeout, headers=self.headers)
        except requests.RequestException as e:
            raise DownloadFailure(url, reason=str(e)) from e
        with resp:
            if resp.status_code != 200:
                raise DownloadFailure(url, status=resp.status_code)
            # keep a Content-Encoding: gzip layer; tarfile decompresses it
            resp.raw.decode_content = False
            try:
                yield resp.raw
            except (requests.RequestException, TransportError) as e:
                raise DownloadFailure(url, reason=str(e)) from e
