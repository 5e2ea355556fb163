import logging
from typing import Dict, List, Optional, Tuple

from .config import CrawlConfig
from .download_flow import download_gbff
from .errors import CrawlError, MalformedDetailPage, MissingCrossReference
from .http_client import PageFetcher
from .models import AssemblyLink, CrawlResult, DownloadRecord
from .parser import (
    parse_assembly_detail,
    parse_assembly_search,
    parse_biosample,
    parse_ftp_listing,
    parse_publication,
)

logger = logging.getLogger("biocrawler.crawl")

REPORT_FIELDS = ("organism_name", "taxonomy_url", "infraspecific_name", "submitter", "date")


def crawl_publication(fetcher: PageFetcher, result: CrawlResult, url: str) -> None:
    logger.info("Crawl PubMed %s", url)
    page = fetcher.fetch_page(url, stage="publication")
    publication = parse_publication(page)
    if not publication.assembly_url:
        raise MissingCrossReference(url)
    result.abstract = publication.abstract
    result.keywords = publication.keywords
    result.doi = publication.doi
    result.assembly.url = publication.assembly_url


def crawl_assembly_search(fetcher: PageFetcher, result: CrawlResult) -> None:
    logger.info("Crawl Assembly search %s", result.assembly.url)
    page = fetcher.fetch_page(result.assembly.url, stage="assembly-search")
    for url in parse_assembly_search(page):
        result.assembly.links.append(AssemblyLink(url=url))
    logger.info("Found %d assembly links", len(result.assembly.links))


def apply_detail_fields(link: AssemblyLink, fields: Dict[str, str]) -> None:
    report = link.report
    for name in REPORT_FIELDS:
        if name in fields:
            setattr(report, name, fields[name])
    if "bio_sample_url" in fields:
        report.bio_sample.url = fields["bio_sample_url"]


def crawl_assembly(fetcher: PageFetcher, link: AssemblyLink) -> None:
    logger.info("Crawl Assembly %s", link.url)
    page = fetcher.fetch_page(link.url, stage="assembly")
    try:
        fields, ftp_url = parse_assembly_detail(page)
    except MalformedDetailPage as exc:
        apply_detail_fields(link, exc.fields)
        raise
    apply_detail_fields(link, fields)
    link.report.ftp_url = ftp_url


def crawl_biosample(fetcher: PageFetcher, link: AssemblyLink) -> None:
    bio_sample = link.report.bio_sample
    logger.info("Crawl BioSample %s", bio_sample.url)
    page = fetcher.fetch_page(bio_sample.url, stage="biosample")
    for name, value in parse_biosample(page).items():
        setattr(bio_sample, name, value)


def crawl_ftp_listing(fetcher: PageFetcher, link: AssemblyLink) -> None:
    logger.info("Crawl FTP %s", link.report.ftp_url)
    page = fetcher.fetch_page(link.report.ftp_url, stage="ftp")
    link.report.gbff_url = parse_ftp_listing(page)
    if not link.report.gbff_url:
        logger.info("No GBFF file listed for %s", link.url)


def process_link(
    fetcher: PageFetcher, link: AssemblyLink, config: CrawlConfig
) -> Optional[DownloadRecord]:
    """Run the detail, BioSample, FTP and download stages for one assembly.

    Every failure here is logged and confined to this link. A malformed detail
    page keeps the fields dispatched before the mismatch but drops its FTP link,
    so the BioSample, FTP and download stages do not run for it.
    """
    try:
        crawl_assembly(fetcher, link)
    except CrawlError as exc:
        logger.warning("Skipping assembly: %s", exc)
        return None

    if link.report.bio_sample.url:
        try:
            crawl_biosample(fetcher, link)
        except CrawlError as exc:
            logger.warning("BioSample skipped: %s", exc)

    if not link.report.ftp_url:
        return None
    try:
        crawl_ftp_listing(fetcher, link)
    except CrawlError as exc:
        logger.warning("FTP listing skipped: %s", exc)
        return None

    if not config.download or not link.report.gbff_url:
        return None
    return download_gbff(
        fetcher, link.report, download_dir=config.download_dir, timeout=config.download_timeout
    )


def crawl(fetcher: PageFetcher, config: CrawlConfig) -> Tuple[CrawlResult, List[DownloadRecord]]:
    """Full crawl from the seed publication; raises CrawlError on fatal stages."""
    result = CrawlResult()
    crawl_publication(fetcher, result, config.seed_url)
    crawl_assembly_search(fetcher, result)

    downloads: List[DownloadRecord] = []
    for link in result.assembly.links:
        record = process_link(fetcher, link, config)
        if record is not None:
            downloads.append(record)
    return result, downloads
