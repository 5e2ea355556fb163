from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from biocrawler.errors import FetchFailure
from biocrawler.http_client import Page


class FakeFetcher:
    """Serves canned HTML by URL and records every fetch and download."""

    def __init__(self, pages: Dict[str, str], files: Optional[Dict[str, bytes]] = None) -> None:
        self.pages = pages
        self.files = files or {}
        self.visited: List[str] = []
        self.downloads: List[tuple] = []

    def fetch_page(self, url: str, stage: str = "") -> Page:
        self.visited.append(url)
        if url not in self.pages:
            raise FetchFailure(url, "HTTP Error 404: Not Found", stage=stage)
        return Page(url=url, html=self.pages[url])

    def download_file(self, url: str, dest_path: str, timeout: int = 600, label: Optional[str] = None) -> int:
        self.downloads.append((url, dest_path, timeout))
        if url not in self.files:
            raise FetchFailure(url, "timed out", stage="download")
        payload = self.files[url]
        Path(dest_path).write_bytes(payload)
        return len(payload)


@pytest.fixture
def make_fetcher():
    def factory(pages: Dict[str, str], files: Optional[Dict[str, bytes]] = None) -> FakeFetcher:
        return FakeFetcher(pages, files)

    return factory
