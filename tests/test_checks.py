"""
BASIC CHECK TEST SUITE
======================
Tests the deterministic validators against a known-good report and a set of
targeted breakages.

USAGE:
  pytest tests/test_checks.py -v
  pytest tests/test_checks.py -k "gap"        # money / gap-sum tests only

HOW TO ADD NEW REGRESSION TESTS:
  1. When a bad report slips through, copy the offending fragment into a
     test below via make_report(extra=...).
  2. Assert the specific finding fires.
  3. Add or tune the rule in report_qc/validation/rules.py.
"""
import pytest

from report_qc.loaders.report import parse_html
from report_qc.models import Category, QCStatus, Severity
from report_qc.pipeline.qc import run_qc
from report_qc.validation.checks import (
    check_claims,
    check_competitors,
    check_firm_identity,
    check_gap_math,
    check_language,
    check_location,
    check_personalization,
    check_placeholders,
    check_practice_areas,
    check_review_sanity,
    check_round_figures,
    check_structure,
    check_visual,
    check_word_count,
    extract_money,
    run_basic_checks,
)


def _categories(findings):
    return {f.category for f in findings}


# ==========================================
# END TO END
# ==========================================

def test_good_report_has_no_findings(research, report_html):
    assert run_basic_checks(research, report_html) == []


def test_good_report_passes_without_ai(research, report_html):
    result = run_qc(research, report_html, llm=None)

    assert result.status is QCStatus.PASSED
    assert result.counts["critical"] == 0
    assert result.counts["important"] == 0
    assert result.recommendation == "High quality report. Send immediately."


def _drop_firm_name(r):
    del r["firmName"]


def _drop_city(r):
    r["location"].pop("city")


def _two_competitors(r):
    r["competitors"] = r["competitors"][:2]


@pytest.mark.parametrize("mutate", [_drop_firm_name, _drop_city, _two_competitors])
def test_missing_core_research_fails_regardless_of_report(research, report_html, mutate):
    mutate(research)

    result = run_qc(research, report_html)

    assert result.status is QCStatus.FAILED
    assert _categories(result.findings) & {Category.DATA_EXISTENCE, Category.DATA_SANITY}


def test_basic_checks_are_idempotent(research, make_report):
    html = make_report(gaps=("$8,000", "$4,000", "$2,000"), extra="<p>We'd love to chat!!!</p>")

    first = run_basic_checks(research, html)
    second = run_basic_checks(research, html)

    assert first
    assert first == second


# ==========================================
# RESEARCH DATA
# ==========================================

def test_placeholder_firm_name_is_critical(research):
    research["firmName"] = "Unknown Firm"

    findings = check_firm_identity(research)

    assert [(f.severity, f.category) for f in findings] == [(Severity.CRITICAL, Category.DATA_EXISTENCE)]


def test_state_must_be_two_letters(research):
    research["location"]["state"] = "Texas"

    findings = check_location(research)

    assert [(f.severity, f.category) for f in findings] == [(Severity.IMPORTANT, Category.DATA_SANITY)]


def test_uk_firm_needs_no_state(research):
    research["location"] = {"city": "Leeds", "state": "", "country": "United Kingdom"}

    assert check_location(research) == []


def test_generic_practice_area(research):
    research["practiceAreas"] = ["Legal Services"]

    findings = check_practice_areas(research)

    assert findings[0].severity is Severity.IMPORTANT
    assert findings[0].category is Category.DATA_SANITY


def test_nested_practice_areas_are_read(research):
    del research["practiceAreas"]
    research["practice"] = {"practiceAreas": ["family law"]}

    assert check_practice_areas(research) == []


def test_competitor_missing_fields_and_weak_name(research):
    research["competitors"][1] = {"name": "Smith", "reviews": 12}

    findings = check_competitors(research)

    assert len(findings) == 2
    missing, weak = findings
    assert (missing.severity, missing.category) == (Severity.IMPORTANT, Category.DATA_EXISTENCE)
    assert "rating" in missing.message
    assert (weak.severity, weak.category) == (Severity.WARNING, Category.DATA_SANITY)


def test_review_count_and_rating_sanity(research):
    research["reviewCount"] = -3
    research["competitors"][0]["rating"] = 7.2

    findings = check_review_sanity(research)

    assert len(findings) == 2
    assert all(f.severity is Severity.IMPORTANT and f.category is Category.DATA_SANITY for f in findings)


def test_zero_reviews_with_rating_is_a_logic_warning(research):
    research["competitors"][2]["reviews"] = 0

    findings = check_review_sanity(research)

    assert [(f.severity, f.category) for f in findings] == [(Severity.WARNING, Category.LOGIC)]


# ==========================================
# MONEY
# ==========================================

def test_gap_sum_exact_match_passes(make_report):
    html = make_report(hero="$15,000", gaps=("$8,000", "$4,000", "$3,000"))

    assert check_gap_math(parse_html(html)) == []


def test_gap_sum_outside_tolerance_fails(make_report):
    html = make_report(hero="$15,000", gaps=("$8,000", "$4,000", "$2,000"))

    findings = check_gap_math(parse_html(html))

    assert len(findings) == 1
    assert findings[0].severity is Severity.CRITICAL
    assert findings[0].category is Category.MATH


def test_gap_sum_within_tolerance_passes(make_report):
    # $14,500 is 3.3% off $15,000
    html = make_report(hero="$15,000", gaps=("$8,000", "$4,000", "$2,500"))

    assert check_gap_math(parse_html(html)) == []


def test_gap_sum_skipped_without_three_costs(make_report):
    html = make_report(gaps=("$8,000", "$4,000"))

    assert check_gap_math(parse_html(html)) == []


def test_money_suffixes_and_ranges():
    assert extract_money("between $8K-12K a month, or £1.5M a year") == [8000.0, 1500000.0]


def test_round_figures_warning():
    findings = check_round_figures("Losing $20,000 a month, $50K a quarter, and $7,450 in fees")

    assert len(findings) == 1
    assert findings[0].severity is Severity.WARNING
    assert findings[0].category is Category.MATH
    assert "$20,000" in findings[0].message
    assert "$7,450" not in findings[0].message


# ==========================================
# REPORT BODY
# ==========================================

def test_bare_report_misses_every_structure_marker():
    html = "<p>Nothing here</p>"

    findings = check_structure(html, parse_html(html))

    assert [f.severity for f in findings] == [
        Severity.IMPORTANT,  # gap sections
        Severity.IMPORTANT,  # competitor table
        Severity.WARNING,  # flow markers
        Severity.WARNING,  # emphasis
    ]
    assert _categories(findings) == {Category.STRUCTURE}


def test_numbered_gap_headings_count_as_sections():
    html = "<h2>Gap #1</h2><h2>Gap #2</h2><h3>Gap 3: reviews</h3>"

    findings = check_structure(html, parse_html(html))

    assert not any("gap sections" in f.message for f in findings)


def test_firm_name_mentioned_once(research):
    findings = check_personalization(research, "Doe & Associates serves Austin, Austin, Austin, Austin.")

    assert len(findings) == 1
    assert findings[0].category is Category.CONTENT
    assert "Doe & Associates" in findings[0].message


def test_banned_phrase_with_curly_apostrophe():
    text = "We’d love to chat about this."

    findings = check_language(text, text)

    assert [(f.severity, f.category) for f in findings] == [(Severity.IMPORTANT, Category.LANGUAGE)]


def test_exclamations_and_em_dash():
    html = "<p>Act now! Call today! Book this week! Results &mdash; fast.</p>"
    text = "Act now! Call today! Book this week! Results — fast."

    findings = check_language(html, text)

    assert len(findings) == 2
    assert all(f.severity is Severity.WARNING for f in findings)


@pytest.mark.parametrize("count, flagged", [(5, False), (6, True)])
def test_weasel_word_limit(count, flagged):
    text = " ".join(["Rankings will likely improve."] * count)

    findings = check_language(text, text)

    assert bool(findings) is flagged
    if flagged:
        assert [(f.severity, f.category) for f in findings] == [(Severity.WARNING, Category.LANGUAGE)]
        assert "6 found" in findings[0].message


@pytest.mark.parametrize("count, flagged", [(3, False), (4, True)])
def test_generic_phrase_limit(count, flagged):
    phrases = ["high-quality", "world-class", "industry-leading", "best-in-class"][:count]
    text = "Competitors advertise " + ", ".join(phrases) + " representation."

    findings = check_language(text, text)

    assert bool(findings) is flagged
    if flagged:
        assert [(f.severity, f.category) for f in findings] == [(Severity.WARNING, Category.LANGUAGE)]
        assert findings[0].evidence == ", ".join(phrases)


@pytest.mark.parametrize("fragment", ["<p>Dear {{contact_name}},</p>", "<p>[TODO] add ads data</p>"])
def test_placeholders_fail_the_report(research, make_report, fragment):
    result = run_qc(research, make_report(extra=fragment))

    assert result.status is QCStatus.FAILED
    assert any(f.category is Category.BROKEN and f.severity is Severity.CRITICAL for f in result.findings)


def test_broken_values_in_visible_text():
    text = "You rank #undefined with NaN reviews"

    findings = check_placeholders(text, text)

    assert len(findings) == 1
    assert "NaN" in findings[0].evidence


def test_null_and_void_is_not_a_broken_value():
    text = "The clause was declared null and void by the court."

    assert check_placeholders(text, text) == []


def test_nested_css_braces_are_not_placeholders():
    html = "<style>@media(max-width:600px){.x{color:red}}</style><p>Fine</p>"

    assert check_placeholders(html, "Fine") == []


def test_visual_checks():
    findings = check_visual("<p>plain</p>")

    assert len(findings) == 3
    assert _categories(findings) == {Category.VISUAL}


def test_word_count_bounds():
    assert check_word_count("word " * 799)[0].category is Category.FINAL
    assert check_word_count("word " * 800) == []
    assert "too long" in check_word_count("word " * 5001)[0].message


def test_unrealistic_claims():
    findings = check_claims("We guarantee you will double your caseload with 10x more leads.")

    assert len(findings) == 3
    assert all(f.category is Category.CREDIBILITY for f in findings)
    assert findings[0].evidence.lower() == "guarantee"
