"""Per-stage extraction rule sets for the PubMed -> Assembly -> BioSample chain.

Each ``parse_*`` function builds a fresh rule set, runs it against one fetched
page and returns plain values; nothing here touches the network or the result
graph.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
from urllib.parse import urljoin

from .config import ASSEMBLY_LINK_TEXT, FTP_DIRECTORY_MARKER, GBFF_MARKER
from .errors import MalformedDetailPage
from .extract import Rule, node_text, run_rules
from .http_client import Page

KEYWORDS_LABEL = "Keywords:"
KEYWORD_SEPARATOR = "; "


@dataclass
class Publication:
    abstract: str
    keywords: List[str]
    doi: str
    assembly_url: str


@dataclass
class DefinitionValue:
    text: str
    href: str


@dataclass
class DefinitionBlock:
    terms: List[str]
    values: List[DefinitionValue]


def normalize_label(text: str) -> str:
    """Collapse whitespace, drop a trailing colon and lowercase a page label."""
    cleaned = re.sub(r"\s+", " ", text).strip()
    cleaned = cleaned.rstrip(":").strip()
    return cleaned.lower()


def split_keywords(text: str) -> List[str]:
    """Turn ``"Keywords: A; B; C"`` into ``["A", "B", "C"]``."""
    cleaned = text.strip()
    if cleaned.startswith(KEYWORDS_LABEL):
        cleaned = cleaned[len(KEYWORDS_LABEL):]
    cleaned = cleaned.strip()
    if not cleaned:
        return []
    parts = [part.strip() for part in cleaned.split(KEYWORD_SEPARATOR)]
    return [part for part in parts if part]


def ftp_to_http(url: str) -> str:
    if url.startswith("ftp://"):
        return "http://" + url[len("ftp://"):]
    return url


def _anchor_href(node, base_url: str) -> str:
    anchor = node.select_one("a[href]")
    if anchor is None:
        return ""
    return urljoin(base_url, anchor["href"])


# Publication page

def _abstract(node, base_url: str) -> Optional[str]:
    paragraphs = [node_text(p) for p in node.find_all("p")]
    text = " ".join(p for p in paragraphs if p)
    return text or None


def _keywords(node, base_url: str) -> Optional[List[str]]:
    text = node_text(node)
    if not text.startswith(KEYWORDS_LABEL):
        return None
    return split_keywords(text)


def _doi(node, base_url: str) -> Optional[str]:
    return node.get("href") or None


def _assembly_link(node, base_url: str) -> Optional[str]:
    if node_text(node) != ASSEMBLY_LINK_TEXT:
        return None
    return _anchor_href(node, base_url) or None


def publication_rules() -> List[Rule]:
    return [
        Rule("abstract", "#enc-abstract", _abstract),
        Rule("keywords", "#enc-abstract + p", _keywords),
        Rule("doi", ".doi .id-link", _doi),
        Rule("assembly_url", "#related-links li", _assembly_link),
    ]


def parse_publication(page: Page) -> Publication:
    found = run_rules(page, publication_rules())
    return Publication(
        abstract=found.get("abstract", ""),
        keywords=found.get("keywords", []),
        doi=found.get("doi", ""),
        assembly_url=found.get("assembly_url", ""),
    )


# Assembly search results

def _result_links(node, base_url: str) -> List[str]:
    return [urljoin(base_url, a["href"]) for a in node.select("a[href]")]


def parse_assembly_search(page: Page) -> List[str]:
    """Return the assembly detail-page URLs listed on a search page, in page order."""
    found = run_rules(page, [Rule("links", ".rslt .title", _result_links, collect=True)])
    return found["links"]


# Assembly detail page

def _definition_block(node, base_url: str) -> DefinitionBlock:
    terms = [dt.get_text() for dt in node.find_all("dt")]
    values = [
        DefinitionValue(text=node_text(dd), href=_anchor_href(dd, base_url))
        for dd in node.find_all("dd")
    ]
    return DefinitionBlock(terms=terms, values=values)


def _ftp_directory(node, base_url: str) -> Optional[str]:
    if FTP_DIRECTORY_MARKER not in node.get_text():
        return None
    href = node.get("href")
    if not href:
        return None
    return urljoin(base_url, ftp_to_http(href))


def _set_organism(fields: Dict[str, str], value: DefinitionValue) -> None:
    fields["organism_name"] = value.text
    fields["taxonomy_url"] = value.href


def _setter(name: str, use_href: bool = False) -> Callable[[Dict[str, str], DefinitionValue], None]:
    def apply(fields: Dict[str, str], value: DefinitionValue) -> None:
        fields[name] = value.href if use_href else value.text

    return apply


DETAIL_FIELDS: Dict[str, Callable[[Dict[str, str], DefinitionValue], None]] = {
    "organism name": _set_organism,
    "infraspecific name": _setter("infraspecific_name"),
    "biosample": _setter("bio_sample_url", use_href=True),
    "submitter": _setter("submitter"),
    "date": _setter("date"),
}


def dispatch_detail_fields(blocks: List[DefinitionBlock], url: str) -> Dict[str, str]:
    """Map definition-list pairs onto report fields through ``DETAIL_FIELDS``.

    Raises MalformedDetailPage when a list has unequal label and value counts,
    after dispatching the pairs that do line up.
    """
    fields: Dict[str, str] = {}
    for block in blocks:
        for term, value in zip(block.terms, block.values):
            setter = DETAIL_FIELDS.get(normalize_label(term))
            if setter is not None:
                setter(fields, value)
        if len(block.terms) != len(block.values):
            raise MalformedDetailPage(url, len(block.terms), len(block.values), fields)
    return fields


def parse_assembly_detail(page: Page) -> Tuple[Dict[str, str], str]:
    """Return ``(fields, ftp_url)`` for an assembly detail page."""
    found = run_rules(
        page,
        [
            Rule("lists", "dl", _definition_block, collect=True),
            Rule("ftp_url", ".portlet_content ul a", _ftp_directory),
        ],
    )
    fields = dispatch_detail_fields(found["lists"], page.url)
    return fields, found.get("ftp_url", "")


# BioSample page

BIOSAMPLE_FIELDS: Dict[str, str] = {
    "strain": "strain",
    "collection date": "collection_date",
    "broad-scale environmental context": "broad_scale_environmental_context",
    "local-scale environmental context": "local_scale_environmental_context",
    "environmental medium": "environmental_medium",
    "geographic location": "geographic_location",
    "latitude and longitude": "lat_long",
    "host": "host",
    "isolation and growth condition": "isolation_and_growth_condition",
    "number of replicons": "number_of_replicons",
    "ploidy": "ploidy",
    "propagation": "propagation",
}


def _attribute_row(node, base_url: str) -> Optional[Tuple[str, str]]:
    header = node.find("th")
    cell = node.find("td")
    if header is None or cell is None:
        return None
    name = BIOSAMPLE_FIELDS.get(normalize_label(header.get_text()))
    if name is None:
        return None
    return name, node_text(cell)


def parse_biosample(page: Page) -> Dict[str, str]:
    found = run_rules(page, [Rule("rows", "tbody tr", _attribute_row, collect=True)])
    attributes: Dict[str, str] = {}
    for name, value in found["rows"]:
        attributes.setdefault(name, value)
    return attributes


# FTP directory listing

def _gbff_link(node, base_url: str) -> Optional[str]:
    if GBFF_MARKER not in node.get_text():
        return None
    href = node.get("href")
    return urljoin(base_url, href) if href else None


def parse_ftp_listing(page: Page) -> str:
    found = run_rules(page, [Rule("gbff_url", "pre a", _gbff_link)])
    return found.get("gbff_url", "")
