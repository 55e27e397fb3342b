"""Individual basic checks and the run_basic_checks orchestrator.

Every check is a pure function returning a list of findings; none of them
touches the network or the filesystem. The orchestrator runs them in a fixed
order so the same inputs always yield the same ordered finding list.
"""

from __future__ import annotations

import re
from numbers import Number
from typing import Optional

from bs4 import BeautifulSoup

from report_qc import config
from report_qc.loaders.report import count_words, extract_text, parse_html
from report_qc.loaders.research import (
    competitors,
    firm_name,
    firm_reviews,
    is_us,
    location,
    practice_areas,
)
from report_qc.models import Category, Finding, Severity
from report_qc.validation import rules


# ── Main validation entry point ──────────────────────────────────────────


def run_basic_checks(research: dict, report_html: str) -> list[Finding]:
    """Run every structural/regex check on one (research, report) pair."""
    soup = parse_html(report_html)
    text = extract_text(report_html)

    findings: list[Finding] = []
    # research data
    findings += check_firm_identity(research)
    findings += check_location(research)
    findings += check_practice_areas(research)
    findings += check_competitors(research)
    findings += check_review_sanity(research)
    # money
    findings += check_round_figures(text)
    findings += check_gap_math(soup)
    # report body
    findings += check_structure(report_html, soup)
    findings += check_personalization(research, text)
    findings += check_language(report_html, text)
    findings += check_placeholders(report_html, text)
    findings += check_visual(report_html)
    findings += check_word_count(text)
    findings += check_claims(text)
    return findings


def _finding(severity: Severity, category: Category, message: str, evidence: Optional[str] = None) -> Finding:
    return Finding(severity=severity, category=category, message=message, evidence=evidence)


# ── Research data checks ─────────────────────────────────────────────────


def check_firm_identity(research: dict) -> list[Finding]:
    name = firm_name(research)
    if (
        not name
        or name.lower() in config.PLACEHOLDER_FIRM_NAMES
        or len(name) < config.MIN_FIRM_NAME_LENGTH
    ):
        return [_finding(
            Severity.CRITICAL, Category.DATA_EXISTENCE,
            f"Firm name is missing or generic: '{name}'",
        )]
    return []


def check_location(research: dict) -> list[Finding]:
    loc = location(research)
    findings = []

    city = loc["city"]
    if not city or city.lower() in config.PLACEHOLDER_FIRM_NAMES:
        findings.append(_finding(Severity.CRITICAL, Category.DATA_EXISTENCE, "City is missing"))

    # A state is only expected for US firms
    if is_us(research):
        state = loc["state"]
        if not state or state.lower() in config.PLACEHOLDER_FIRM_NAMES:
            findings.append(_finding(Severity.CRITICAL, Category.DATA_EXISTENCE, "State is missing"))
        elif not re.fullmatch(r"[A-Za-z]{2}", state):
            findings.append(_finding(
                Severity.IMPORTANT, Category.DATA_SANITY,
                f"State should be a 2-letter code, got '{state}'",
            ))
    return findings


def check_practice_areas(research: dict) -> list[Finding]:
    areas = practice_areas(research)
    if not areas:
        return [_finding(Severity.CRITICAL, Category.DATA_EXISTENCE, "No practice areas identified")]
    if all(a.lower() in config.GENERIC_PRACTICE_AREAS for a in areas):
        return [_finding(
            Severity.IMPORTANT, Category.DATA_SANITY,
            "Practice area is the generic 'legal services'",
        )]
    return []


def _is_weak_competitor_name(name: str) -> bool:
    if len(name) < config.MIN_COMPETITOR_NAME_LENGTH or name.lower() == "unknown":
        return True
    return len(name.split()) == 1 and "&" not in name


def check_competitors(research: dict) -> list[Finding]:
    comps = competitors(research)
    findings = []

    if len(comps) < config.MIN_COMPETITORS:
        findings.append(_finding(
            Severity.CRITICAL, Category.DATA_EXISTENCE,
            f"Insufficient competitor data ({len(comps)} found, need {config.MIN_COMPETITORS}+)",
        ))

    labels = {"name": "name", "reviews": "review count", "rating": "rating"}
    for idx, comp in enumerate(comps, 1):
        missing = [label for key, label in labels.items() if comp[key] in (None, "")]
        if missing:
            findings.append(_finding(
                Severity.IMPORTANT, Category.DATA_EXISTENCE,
                f"Competitor {idx} is missing {', '.join(missing)}",
            ))
        name = comp["name"]
        if name and _is_weak_competitor_name(name):
            findings.append(_finding(
                Severity.WARNING, Category.DATA_SANITY,
                f"Competitor {idx} has weak name: '{name}'",
            ))
    return findings


def _is_count(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, Number):
        return False
    return float(value).is_integer() and 0 <= value <= config.MAX_REVIEW_COUNT


def _is_rating(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, Number):
        return False
    return 0 <= value <= config.MAX_RATING


def _review_findings(label: str, reviews, rating) -> list[Finding]:
    findings = []
    if reviews is not None and not _is_count(reviews):
        findings.append(_finding(
            Severity.IMPORTANT, Category.DATA_SANITY,
            f"{label} review count {reviews!r} is not an integer in 0-{config.MAX_REVIEW_COUNT}",
        ))
    if rating is not None and not _is_rating(rating):
        findings.append(_finding(
            Severity.IMPORTANT, Category.DATA_SANITY,
            f"{label} rating {rating!r} is outside 0-{config.MAX_RATING:g}",
        ))
    if _is_count(reviews) and reviews == 0 and _is_rating(rating) and rating > 0:
        findings.append(_finding(
            Severity.WARNING, Category.LOGIC,
            f"{label} has 0 reviews but a {rating} rating (inconsistent)",
        ))
    return findings


def check_review_sanity(research: dict) -> list[Finding]:
    findings = []
    reviews, rating = firm_reviews(research)
    findings += _review_findings("Firm", reviews, rating)
    for idx, comp in enumerate(competitors(research), 1):
        findings += _review_findings(f"Competitor {idx}", comp["reviews"], comp["rating"])
    return findings


# ── Money checks ─────────────────────────────────────────────────────────


def parse_money(match: re.Match) -> float:
    """Dollar value of a MONEY_PATTERN match ('$8K' -> 8000.0)."""
    amount = float(match.group(1).replace(",", ""))
    suffix = (match.group(2) or "").upper()
    if suffix == "K":
        amount *= 1_000
    elif suffix == "M":
        amount *= 1_000_000
    return amount


def extract_money(text: str) -> list[float]:
    return [parse_money(m) for m in rules.MONEY_PATTERN.finditer(text)]


def _first_money(text: str) -> Optional[float]:
    match = rules.MONEY_PATTERN.search(text)
    return parse_money(match) if match else None


def _format_money(value: float) -> str:
    return f"${value:,.0f}"


def check_round_figures(text: str) -> list[Finding]:
    """Flag figures that are exact multiples of $10K; real estimates rarely are."""
    unit = config.ROUND_FIGURE_UNIT
    round_values = []
    for value in extract_money(text):
        if value > 0 and value % unit == 0 and value not in round_values:
            round_values.append(value)
    if not round_values:
        return []
    shown = ", ".join(_format_money(v) for v in round_values[:5])
    return [_finding(
        Severity.WARNING, Category.MATH,
        f"Suspiciously round dollar figures: {shown}",
        evidence=shown,
    )]


def gap_figures(soup: BeautifulSoup) -> tuple[Optional[float], list[float]]:
    """(hero total, gap costs) as stated in the report markup."""
    hero_el = soup.select_one(f".{rules.HERO_TOTAL_CLASS}")
    hero = _first_money(hero_el.get_text(" ")) if hero_el else None
    costs = []
    for el in soup.select(f".{rules.GAP_COST_CLASS}"):
        value = _first_money(el.get_text(" "))
        if value is not None:
            costs.append(value)
    return hero, costs


def check_gap_math(soup: BeautifulSoup) -> list[Finding]:
    """The three gap costs must add up to the hero total within tolerance."""
    hero, costs = gap_figures(soup)
    if hero is None or len(costs) != config.REQUIRED_GAP_SECTIONS:
        return []

    gap_sum = round(sum(costs), 2)
    difference = abs(gap_sum - hero)
    allowed = hero * config.MATH_TOLERANCE
    if difference <= allowed:
        return []
    breakdown = " + ".join(_format_money(c) for c in costs)
    return [_finding(
        Severity.CRITICAL, Category.MATH,
        f"Gap costs do not add up: {breakdown} = {_format_money(gap_sum)} "
        f"vs hero total {_format_money(hero)} (off by {_format_money(difference)}, "
        f"tolerance {_format_money(allowed)})",
        evidence=breakdown,
    )]


# ── Report body checks ───────────────────────────────────────────────────


def _count_gap_sections(soup: BeautifulSoup) -> int:
    by_class = len(soup.select(f".{rules.GAP_SECTION_CLASS}"))
    numbered = set()
    for heading in soup.find_all(["h1", "h2", "h3", "h4"]):
        m = re.search(r"\bgap\s*#?\s*(\d)\b", heading.get_text(" "), re.IGNORECASE)
        if m:
            numbered.add(m.group(1))
    return max(by_class, len(numbered))


def _has_competitor_table(soup: BeautifulSoup) -> bool:
    fragment = rules.COMPETITOR_CLASS_FRAGMENT
    for tag in soup.find_all(True):
        classes = " ".join(tag.get("class") or [])
        if fragment in classes or fragment in (tag.get("id") or ""):
            if tag.name == "table" or tag.find("table"):
                return True
    return False


def check_structure(report_html: str, soup: BeautifulSoup) -> list[Finding]:
    findings = []

    gaps = _count_gap_sections(soup)
    if gaps < config.REQUIRED_GAP_SECTIONS:
        findings.append(_finding(
            Severity.IMPORTANT, Category.STRUCTURE,
            f"Missing gap sections (found {gaps}, need {config.REQUIRED_GAP_SECTIONS})",
        ))

    if not _has_competitor_table(soup):
        findings.append(_finding(Severity.IMPORTANT, Category.STRUCTURE, "Competitor table missing"))

    flows = report_html.count(rules.FLOW_MARKER) + sum(
        report_html.count(entity) for entity in rules.FLOW_MARKER_ENTITIES
    )
    if flows < config.MIN_FLOW_MARKERS:
        findings.append(_finding(
            Severity.WARNING, Category.STRUCTURE,
            f"Too few flow markers (found {flows}, need {config.MIN_FLOW_MARKERS}+)",
        ))

    emphasis = len(soup.find_all(rules.EMPHASIS_TAGS))
    if emphasis < config.MIN_EMPHASIS_MARKS:
        findings.append(_finding(
            Severity.WARNING, Category.STRUCTURE,
            f"Too little emphasis markup (found {emphasis}, need {config.MIN_EMPHASIS_MARKS}+)",
        ))
    return findings


def _count_mentions(needle: str, text: str) -> int:
    return len(re.findall(re.escape(needle), text, re.IGNORECASE))


def check_personalization(research: dict, text: str) -> list[Finding]:
    """Firm name and city must recur; a proxy for how specific the report is."""
    findings = []
    name = firm_name(research)
    if name:
        count = _count_mentions(name, text)
        if count < config.MIN_FIRM_NAME_MENTIONS:
            findings.append(_finding(
                Severity.IMPORTANT, Category.CONTENT,
                f"Firm name '{name}' appears {count} time(s) (need {config.MIN_FIRM_NAME_MENTIONS}+)",
            ))
    city = location(research)["city"]
    if city:
        count = _count_mentions(city, text)
        if count < config.MIN_CITY_MENTIONS:
            findings.append(_finding(
                Severity.IMPORTANT, Category.CONTENT,
                f"City '{city}' appears {count} time(s) (need {config.MIN_CITY_MENTIONS}+)",
            ))
    return findings


def check_language(report_html: str, text: str) -> list[Finding]:
    findings = []
    lower = text.lower().replace("’", "'")

    for phrase in rules.BANNED_PHRASES:
        if phrase.lower() in lower:
            findings.append(_finding(
                Severity.IMPORTANT, Category.LANGUAGE,
                f"Banned phrase: '{phrase}'",
                evidence=phrase,
            ))

    weasel = sum(
        len(re.findall(rf"\b{re.escape(word)}\b", lower)) for word in rules.WEASEL_WORDS
    )
    if weasel > config.MAX_WEASEL_WORDS:
        findings.append(_finding(
            Severity.WARNING, Category.LANGUAGE,
            f"Too many weasel words ({weasel} found, max {config.MAX_WEASEL_WORDS})",
        ))

    generic = [p for p in rules.GENERIC_PHRASES if p in lower]
    if len(generic) > config.MAX_GENERIC_PHRASES:
        findings.append(_finding(
            Severity.WARNING, Category.LANGUAGE,
            f"Too many generic phrases ({len(generic)} found, max {config.MAX_GENERIC_PHRASES})",
            evidence=", ".join(generic),
        ))

    exclamations = text.count("!")
    if exclamations > config.MAX_EXCLAMATIONS:
        findings.append(_finding(
            Severity.WARNING, Category.LANGUAGE,
            f"Too many exclamation marks ({exclamations} found, max {config.MAX_EXCLAMATIONS})",
        ))

    if rules.EM_DASH_PATTERN.search(report_html):
        findings.append(_finding(Severity.WARNING, Category.LANGUAGE, "Em dash found"))
    return findings


def check_placeholders(report_html: str, text: str) -> list[Finding]:
    """Unresolved template syntax and leaked undefined/null/NaN values."""
    findings = []

    # "}}" also closes nested CSS rules, so it only counts in visible text
    found = [
        m for m in rules.PLACEHOLDER_MARKERS
        if m in (text if m == "}}" else report_html)
    ]
    if found:
        findings.append(_finding(
            Severity.CRITICAL, Category.BROKEN,
            f"Placeholder text found: {', '.join(found)}",
            evidence=", ".join(found),
        ))

    tokens = []
    for m in rules.BROKEN_TOKEN_PATTERN.finditer(text):
        # "null and void" is ordinary legal language
        if m.group(1) == "null" and text[m.end():m.end() + 9] == " and void":
            continue
        if m.group(1) not in tokens:
            tokens.append(m.group(1))
    if tokens:
        findings.append(_finding(
            Severity.CRITICAL, Category.BROKEN,
            f"Broken values rendered: {', '.join(tokens)}",
            evidence=", ".join(tokens),
        ))
    return findings


def check_visual(report_html: str) -> list[Finding]:
    findings = []
    if not re.search(r"<style[\s>]", report_html, re.IGNORECASE):
        findings.append(_finding(Severity.WARNING, Category.VISUAL, "No <style> block"))
    if not rules.FONT_FAMILY_PATTERN.search(report_html):
        findings.append(_finding(Severity.WARNING, Category.VISUAL, "No font-family declaration"))
    if not rules.RESPONSIVE_PATTERN.search(report_html):
        findings.append(_finding(
            Severity.WARNING, Category.VISUAL,
            "No responsive design indicator (@media or viewport meta)",
        ))
    return findings


def check_word_count(text: str) -> list[Finding]:
    words = count_words(text)
    if words < config.MIN_WORD_COUNT:
        return [_finding(
            Severity.IMPORTANT, Category.FINAL,
            f"Report too short: {words} words (need {config.MIN_WORD_COUNT}+)",
        )]
    if words > config.MAX_WORD_COUNT:
        return [_finding(
            Severity.IMPORTANT, Category.FINAL,
            f"Report too long: {words} words (max {config.MAX_WORD_COUNT})",
        )]
    return []


def check_claims(text: str) -> list[Finding]:
    findings = []
    for rule in rules.UNREALISTIC_CLAIMS:
        m = rule.pattern.search(text)
        if m:
            findings.append(_finding(rule.severity, rule.category, rule.message, evidence=m.group(0)))
    return findings
