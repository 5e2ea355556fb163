import argparse
import logging
from typing import List, Optional

from .config import (
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_OUTPUT,
    DEFAULT_SEED_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    CrawlConfig,
)
from .crawl import crawl
from .errors import CrawlError
from .http_client import PageFetcher
from .storage import render_report, write_report

logger = logging.getLogger("biocrawler.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="biocrawler",
        description="Crawl a PubMed record through NCBI Assembly and BioSample, downloading GBFF files.",
    )
    parser.add_argument("-u", "--url", default=DEFAULT_SEED_URL, help="PubMed record URL to start from.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress log output below errors.")
    parser.add_argument("-p", "--print", dest="print_report", action="store_true",
                        help="Also print the JSON report to stdout.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="Path of the JSON report.")
    parser.add_argument("--download-dir", default=".", help="Directory for downloaded GBFF files.")
    parser.add_argument("--no-download", action="store_true", help="Resolve GBFF URLs without downloading.")
    parser.add_argument("--timeout", type=int, default=DEFAULT_TIMEOUT)
    parser.add_argument("--download-timeout", type=int, default=DEFAULT_DOWNLOAD_TIMEOUT)
    parser.add_argument("--delay", type=float, default=0.0, help="Delay between requests in seconds.")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT)
    return parser


def configure_logging(quiet: bool, verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    if quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def config_from_args(args: argparse.Namespace) -> CrawlConfig:
    return CrawlConfig(
        seed_url=args.url,
        output_path=args.output,
        download_dir=args.download_dir,
        user_agent=args.user_agent,
        delay=args.delay,
        timeout=args.timeout,
        download_timeout=args.download_timeout,
        download=not args.no_download,
        print_report=args.print_report,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.quiet, args.verbose)
    config = config_from_args(args)

    fetcher = PageFetcher(
        config.user_agent,
        delay=config.delay,
        timeout=config.timeout,
        max_body_size=config.max_body_size,
    )
    try:
        result, downloads = crawl(fetcher, config)
    except CrawlError as exc:
        logger.error("Crawl aborted: %s", exc)
        return 1

    if config.print_report:
        print(render_report(result))
    try:
        write_report(config.output_path, result)
    except OSError as exc:
        logger.error("Failed to write %s: %s", config.output_path, exc)
        return 1
    logger.info(
        "Wrote %s (%d assemblies, %d files downloaded)",
        config.output_path,
        len(result.assembly.links),
        len(downloads),
    )
    return 0
