import copy
import os

import pytest


def pytest_configure(config):
    """
    Runs before test collection.
    Strips model credentials so no test can reach the Anthropic API; every
    test that needs a model passes a MagicMock in its place.
    """
    for key in ("ANTHROPIC_API_KEY",):
        os.environ.pop(key, None)


# ==========================================
# SAMPLE RESEARCH RECORD
# ==========================================

GOOD_RESEARCH = {
    "firmName": "Doe & Associates",
    "location": {"city": "Austin", "state": "TX"},
    "practiceAreas": ["divorce"],
    "reviewCount": 42,
    "rating": 4.6,
    "competitors": [
        {"name": "Smith Family Law", "reviews": 212, "rating": 4.7},
        {"name": "Brown & Partners", "reviews": 96, "rating": 4.4},
        {"name": "Capitol Divorce Group", "reviews": 158, "rating": 4.8},
    ],
}


# ==========================================
# SAMPLE REPORT
# ==========================================

FILLER_PARAGRAPH = (
    "<p>Most people searching for a divorce lawyer in {city} start on their phone late in the evening. "
    "They compare the first three firms they see, read a handful of reviews, and call whoever answers. "
    "Firms that respond within five minutes book far more consultations than firms that reply the next morning. "
    "Every hour of delay hands the caller to a competitor who picked up the phone first.</p>"
)

GAP_TITLES = ["No Google Ads presence", "Slow after-hours response", "Thin review profile"]


def build_report(
    firm: str = "Doe &amp; Associates",
    city: str = "Austin",
    hero: str = "$15,000",
    gaps=("$8,000", "$4,000", "$3,000"),
    extra: str = "",
    filler_count: int = 14,
) -> str:
    """A rendered report that passes every basic check with the defaults."""
    gap_cards = "\n".join(
        f'<div class="gap-card"><h2>Gap {i}: {title}</h2>'
        f'<p>Estimated loss: <span class="gap-cost">{cost}</span> per month</p></div>'
        for i, (title, cost) in enumerate(zip(GAP_TITLES, gaps), 1)
    )
    rows = "\n".join(
        f"<tr><td>{c['name']}</td><td>{c['reviews']}</td><td>{c['rating']}</td></tr>"
        for c in GOOD_RESEARCH["competitors"]
    )
    filler = "\n".join(FILLER_PARAGRAPH.format(city=city) for _ in range(filler_count))
    return f"""<!DOCTYPE html>
<html>
<head>
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Marketing gap report</title>
<style>
body {{ font-family: Georgia, serif; color: #222; }}
.hero {{ padding: 24px; }}
@media (max-width: 600px) {{ .hero {{ padding: 12px; }} }}
</style>
</head>
<body>
<section class="hero">
<h1>{firm} is losing <span class="hero-total">{hero}</span> a month in {city}</h1>
<p><strong>{firm}</strong> ranks behind three {city} competitors for divorce searches.</p>
</section>
{gap_cards}
<section class="competitor-section">
<h2>How you compare in {city}</h2>
<table class="competitor-table">
<tr><th>Firm</th><th>Reviews</th><th>Rating</th></tr>
{rows}
</table>
</section>
<p>Search → Call → Consultation.</p>
<p><strong>Fast response</strong> wins cases. <em>Reviews</em> build trust. <strong>Ads</strong> fill the gap.</p>
{filler}
{extra}
</body>
</html>
"""


@pytest.fixture
def research():
    return copy.deepcopy(GOOD_RESEARCH)


@pytest.fixture
def report_html():
    return build_report()


@pytest.fixture
def make_report():
    return build_report
