"""Load rendered HTML reports and extract their visible text."""

from __future__ import annotations

import re
from pathlib import Path

from bs4 import BeautifulSoup

from report_qc.errors import InputError


def load_report(path: str | Path) -> str:
    """Read a rendered report. Raises InputError if missing or empty."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            html = f.read()
    except OSError as e:
        raise InputError(f"Cannot read report file {path}: {e}") from e

    if not html.strip():
        raise InputError(f"Report file {path} is empty")
    return html


def save_report(html: str, path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(html)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def extract_text(html: str) -> str:
    """Visible text only: scripts and style blocks dropped, whitespace collapsed."""
    soup = parse_html(html)
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text(" ")
    return re.sub(r"\s+", " ", text).strip()


def count_words(text: str) -> int:
    return len(text.split())
