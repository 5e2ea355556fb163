import logging
import os
import time
from dataclasses import dataclass
from http.client import HTTPException, IncompleteRead
from typing import Optional
from urllib.error import URLError
from urllib.request import Request, urlopen

from .config import DEFAULT_DOWNLOAD_TIMEOUT, DEFAULT_TIMEOUT, MAX_BODY_SIZE
from .errors import FetchFailure

logger = logging.getLogger("biocrawler.http")

CHUNK_SIZE = 64 * 1024
PART_SUFFIX = ".part"


@dataclass
class Page:
    url: str
    html: str


class PageFetcher:
    """HTTP helper shared by every stage: optional throttling, capped page bodies,
    streamed downloads with progress logs."""

    def __init__(
        self,
        user_agent: str,
        delay: float = 0.0,
        timeout: int = DEFAULT_TIMEOUT,
        max_body_size: int = MAX_BODY_SIZE,
    ) -> None:
        self.user_agent = user_agent
        self.delay = delay
        self.timeout = timeout
        self.max_body_size = max_body_size
        self._last_request = 0.0

    def _sleep_if_needed(self) -> None:
        elapsed = time.time() - self._last_request
        if elapsed < self.delay:
            time.sleep(self.delay - elapsed)

    def _open(self, url: str, timeout: int):
        self._sleep_if_needed()
        req = Request(url, headers={"User-Agent": self.user_agent}, method="GET")
        return urlopen(req, timeout=timeout)

    def fetch_page(self, url: str, stage: str = "") -> Page:
        """GET ``url`` and return its decoded body, truncated at ``max_body_size``."""
        logger.debug("GET %s", url)
        try:
            with self._open(url, self.timeout) as resp:
                self._last_request = time.time()
                content = resp.read(self.max_body_size)
                final_url = resp.geturl() or url
                charset = resp.headers.get_content_charset() or "utf-8"
        except (URLError, OSError, ValueError, HTTPException) as exc:
            self._last_request = time.time()
            raise FetchFailure(url, exc, stage=stage) from exc
        if len(content) >= self.max_body_size:
            logger.warning("Body of %s truncated at %d bytes", url, self.max_body_size)
        return Page(url=final_url, html=content.decode(charset, errors="ignore"))

    def download_file(
        self,
        url: str,
        dest_path: str,
        timeout: int = DEFAULT_DOWNLOAD_TIMEOUT,
        label: Optional[str] = None,
    ) -> int:
        """Stream ``url`` to ``dest_path`` as received and return the byte count.

        The body goes to ``dest_path + ".part"`` and replaces ``dest_path`` only
        once the whole declared length has arrived; an existing file is left
        untouched when the transfer fails.
        """
        if not label:
            label = os.path.basename(dest_path) or url
        part_path = dest_path + PART_SUFFIX
        downloaded = 0
        try:
            parent = os.path.dirname(dest_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with self._open(url, timeout) as resp:
                content_type = (resp.headers.get("Content-Type") or "").lower()
                if "text/html" in content_type:
                    raise ValueError(f"Unexpected Content-Type {content_type} for {dest_path}")
                length = resp.headers.get("Content-Length")
                total_size = int(length) if length and length.isdigit() else None
                next_percent = 10
                with open(part_path, "wb") as handle:
                    while True:
                        chunk = resp.read(CHUNK_SIZE)
                        if not chunk:
                            break
                        handle.write(chunk)
                        downloaded += len(chunk)
                        if total_size:
                            percent = int(downloaded * 100 / total_size)
                            if percent >= next_percent:
                                logger.info(
                                    "Downloading %s %d%% (%d/%d bytes)",
                                    label,
                                    percent,
                                    downloaded,
                                    total_size,
                                )
                                next_percent = percent + 10
                if total_size is not None and downloaded != total_size:
                    raise IncompleteRead(b"", total_size - downloaded)
            os.replace(part_path, dest_path)
        except (URLError, OSError, ValueError, HTTPException) as exc:
            if os.path.exists(part_path):
                os.remove(part_path)
            raise FetchFailure(url, exc, stage="download") from exc
        finally:
            self._last_request = time.time()
        return downloaded
