import json
import os

from .models import CrawlResult


def render_report(result: CrawlResult) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, indent=2)


def write_report(path: str, result: CrawlResult) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(render_report(result))
        handle.write("\n")
