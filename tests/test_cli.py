"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

from biocrawler.cli import build_parser, config_from_args, main
from biocrawler.config import DEFAULT_SEED_URL

SEED = "https://pubmed.example.org/1/"

SEED_HTML = """
<div id="enc-abstract"><p>Abstract text</p></div>
<ul id="related-links"><li><a href="/search">Assembly</a></li></ul>
"""


def test_defaults() -> None:
    config = config_from_args(build_parser().parse_args([]))
    assert config.seed_url == DEFAULT_SEED_URL
    assert config.output_path == "data.json"
    assert config.timeout == 30
    assert config.download_timeout == 600
    assert config.download is True
    assert config.print_report is False


def test_short_flags() -> None:
    args = build_parser().parse_args(["-u", SEED, "-q", "-p"])
    assert args.url == SEED
    assert args.quiet is True
    assert args.print_report is True


def test_main_writes_report_and_prints(make_fetcher, tmp_path: Path, capsys) -> None:
    fetcher = make_fetcher({SEED: SEED_HTML, "https://pubmed.example.org/search": "<p>none</p>"})
    output = tmp_path / "data.json"
    with patch("biocrawler.cli.PageFetcher", return_value=fetcher):
        code = main(["-u", SEED, "-q", "-p", "--output", str(output), "--download-dir", str(tmp_path)])
    assert code == 0
    document = json.loads(output.read_text(encoding="utf-8"))
    assert document["abstract"] == "Abstract text"
    assert document["assembly"] == {"url": "https://pubmed.example.org/search", "links": []}
    assert json.loads(capsys.readouterr().out) == document


def test_missing_cross_reference_exits_nonzero_without_report(make_fetcher, tmp_path: Path) -> None:
    fetcher = make_fetcher({SEED: "<div id='enc-abstract'><p>x</p></div>"})
    output = tmp_path / "data.json"
    with patch("biocrawler.cli.PageFetcher", return_value=fetcher):
        code = main(["-u", SEED, "-q", "--output", str(output)])
    assert code == 1
    assert not output.exists()


def test_seed_fetch_failure_exits_nonzero(make_fetcher, tmp_path: Path) -> None:
    output = tmp_path / "data.json"
    with patch("biocrawler.cli.PageFetcher", return_value=make_fetcher({})):
        code = main(["-u", SEED, "-q", "--output", str(output)])
    assert code == 1
    assert not output.exists()
