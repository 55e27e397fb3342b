"""Load research records and read the fields QC cares about.

The research producer has emitted several shapes over time (flat
``practiceAreas`` vs nested ``practice.practiceAreas``, competitor
``reviews`` vs ``reviewCount``). These accessors normalize them without
rewriting the record itself.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from report_qc.config import UK_COUNTRY_MARKERS, US_COUNTRY_NAMES
from report_qc.errors import InputError

_MISSING = object()


def load_research(path: str | Path) -> dict:
    """Read a research JSON document. Raises InputError if unusable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InputError(f"Cannot read research file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"Research file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InputError(f"Research file {path} must contain a JSON object, got {type(data).__name__}")
    return data


def save_research(research: dict, path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(research, f, indent=2)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def firm_name(research: dict) -> str:
    return _text(research.get("firmName"))


def location(research: dict) -> dict:
    loc = research.get("location") or {}
    if not isinstance(loc, dict):
        return {"city": "", "state": "", "country": ""}
    return {
        "city": _text(loc.get("city")),
        "state": _text(loc.get("state")),
        "country": _text(loc.get("country")),
    }


def location_label(research: dict) -> str:
    loc = location(research)
    return ", ".join(p for p in (loc["city"], loc["state"]) if p)


def is_us(research: dict) -> bool:
    return location(research)["country"].lower() in US_COUNTRY_NAMES


def is_uk(research: dict) -> bool:
    country = location(research)["country"].lower()
    if country in UK_COUNTRY_MARKERS:
        return True
    # two-letter codes only match exactly ("uk" is inside "ukraine")
    return any(marker in country for marker in UK_COUNTRY_MARKERS if len(marker) > 2)


def expected_currency(research: dict) -> str:
    return "£" if is_uk(research) else "$"


def expected_terminology(research: dict) -> str:
    return "solicitor/barrister" if is_uk(research) else "attorney/lawyer"


def practice_areas(research: dict) -> list[str]:
    areas = research.get("practiceAreas")
    if not areas:
        practice = research.get("practice") or {}
        if isinstance(practice, dict):
            areas = practice.get("practiceAreas") or practice.get("primaryFocus")
    if isinstance(areas, str):
        areas = [areas]
    if not isinstance(areas, list):
        return []
    return [_text(a) for a in areas if _text(a)]


def _field(entry: dict, *names: str) -> Any:
    """First present value among ``names`` (None counts as missing)."""
    for name in names:
        value = entry.get(name, _MISSING)
        if value is not _MISSING and value is not None:
            return value
    return _MISSING


def competitors(research: dict) -> list[dict]:
    """Competitor entries normalized to ``{name, reviews, rating}``.

    Missing values are returned as None so validators can tell "absent" from
    "zero". Plain-string entries become name-only competitors.
    """
    raw = research.get("competitors") or []
    if not isinstance(raw, list):
        return []

    normalized = []
    for entry in raw:
        if isinstance(entry, str):
            normalized.append({"name": entry.strip(), "reviews": None, "rating": None})
            continue
        if not isinstance(entry, dict):
            continue
        name = _field(entry, "name", "firmName")
        reviews = _field(entry, "reviews", "reviewCount")
        rating = _field(entry, "rating")
        normalized.append({
            "name": _text(name) if name is not _MISSING else "",
            "reviews": None if reviews is _MISSING else reviews,
            "rating": None if rating is _MISSING else rating,
        })
    return normalized


def firm_reviews(research: dict) -> tuple[Optional[Any], Optional[Any]]:
    """The firm's own (review count, rating), either possibly None."""
    return research.get("reviewCount"), research.get("rating")
