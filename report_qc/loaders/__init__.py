"""Data loading: research records and rendered reports."""

from report_qc.loaders.research import (
    load_research,
    save_research,
    firm_name,
    location,
    location_label,
    practice_areas,
    competitors,
    expected_currency,
    expected_terminology,
)
from report_qc.loaders.report import load_report, save_report, extract_text, count_words

__all__ = [
    "load_research",
    "save_research",
    "firm_name",
    "location",
    "location_label",
    "practice_areas",
    "competitors",
    "expected_currency",
    "expected_terminology",
    "load_report",
    "save_report",
    "extract_text",
    "count_words",
]
