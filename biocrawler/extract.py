from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable

from .http_client import Page


def _soup(html: str):
    try:
        from bs4 import BeautifulSoup
    except ImportError as exc:
        raise SystemExit(
            "Missing dependency: beautifulsoup4. Install with `pip install -r requirements.txt`."
        ) from exc
    return BeautifulSoup(html, "html.parser")


@dataclass(frozen=True)
class Rule:
    """A named CSS selector plus the function that turns a matched node into a value.

    ``apply(node, base_url)`` returns ``None`` when the node does not qualify.
    A plain rule keeps the first value and stops scanning; a collecting rule
    keeps every value in document order, flattening returned lists.
    """

    name: str
    selector: str
    apply: Callable[[Any, str], Any]
    collect: bool = False


def run_rules(page: Page, rules: Iterable[Rule]) -> Dict[str, Any]:
    """Evaluate ``rules`` against ``page`` and return the extracted values by rule name."""
    soup = _soup(page.html)
    results: Dict[str, Any] = {}
    for rule in rules:
        collected = []
        for node in soup.select(rule.selector):
            value = rule.apply(node, page.url)
            if value is None:
                continue
            if not rule.collect:
                results[rule.name] = value
                break
            if isinstance(value, list):
                collected.extend(value)
            else:
                collected.append(value)
        if rule.collect:
            results[rule.name] = collected
    return results


def node_text(node) -> str:
    return node.get_text().strip()
