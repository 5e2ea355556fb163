import logging
import os
import time
from typing import Optional

from .config import DEFAULT_DOWNLOAD_TIMEOUT
from .errors import FetchFailure
from .http_client import PageFetcher
from .models import AssemblyReport, DownloadRecord
from .utils import format_elapsed, gbff_filename

logger = logging.getLogger("biocrawler.download")


def download_gbff(
    fetcher: PageFetcher,
    report: AssemblyReport,
    download_dir: str = ".",
    timeout: int = DEFAULT_DOWNLOAD_TIMEOUT,
) -> Optional[DownloadRecord]:
    """Save the report's GBFF file as received (still compressed) under its derived name.

    Failures are logged and reported as ``None`` so the crawl can move on.
    """
    if not report.gbff_url:
        return None

    dest_path = os.path.join(download_dir, gbff_filename(report.gbff_url))
    logger.info("Downloading %s to %s", report.gbff_url, dest_path)
    start = time.perf_counter()
    try:
        size = fetcher.download_file(report.gbff_url, dest_path, timeout=timeout)
    except FetchFailure as exc:
        logger.warning("Download failed, skipping: %s", exc)
        return None
    elapsed = time.perf_counter() - start
    logger.info("Saved %s (%d bytes) in %s", dest_path, size, format_elapsed(elapsed))
    return DownloadRecord(url=report.gbff_url, path=dest_path, size=size, elapsed=elapsed)
