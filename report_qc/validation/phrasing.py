"""Deterministic rewrite of verbose client labels in rendered reports."""

from __future__ import annotations

import re

from report_qc.validation.rules import VERBOSE_PHRASE_FIXES

_COMPILED = [(re.compile(pattern, re.IGNORECASE), replacement) for pattern, replacement in VERBOSE_PHRASE_FIXES]


def prefix_verbose_phrasing(html: str) -> tuple[str, int]:
    """Replace wordy labels ("individual going through a divorce") with short ones.

    Returns the rewritten HTML and the number of replacements made. Rules run in
    table order, so the catch-all "an individual" rule only sees what the
    specific rules left behind.
    """
    total = 0
    for pattern, replacement in _COMPILED:
        html, n = pattern.subn(replacement, html)
        total += n
    return html, total
